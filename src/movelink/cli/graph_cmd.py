"""``movelink graph <description>`` --- Show a dependency graph.

Prints every package reachable from the root in the given environment,
dependents before dependencies, with each package's direct dependencies.

Exit Codes:
    0 --- Graph printed.
    1 --- The graph is cyclic in this environment.
    2 --- The description could not be loaded.
"""

from __future__ import annotations

import sys

import click

from movelink.cli.output import console, print_graph
from movelink.core.description import load_description
from movelink.core.graph import DependencyCycleError, build_graph
from movelink.exceptions import DescriptionError, PackageError


@click.command("graph")
@click.argument("description", type=click.Path(exists=True, dir_okay=False))
@click.option("--env", "-e", "env", required=True, help="Environment to show.")
def graph_command(description: str, env: str) -> None:
    """Show the dependency graph of DESCRIPTION in topological order."""
    try:
        root, loader = load_description(description)
        graph = build_graph(root, loader, [env])
    except (DescriptionError, PackageError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    try:
        order = graph.topological_order(env)
    except DependencyCycleError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        sys.exit(1)

    print_graph(graph, env, order)
    sys.exit(0)

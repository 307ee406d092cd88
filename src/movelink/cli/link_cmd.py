"""``movelink link <description>`` --- Resolve a root package's linkage.

Loads a package graph description, builds the dependency graph for the
requested environment, and prints the linkage table.

Exit Codes:
    0 --- Linkage resolved.
    1 --- Linkage failed (cycle, conflict, or unmet precondition).
    2 --- The description could not be loaded.
"""

from __future__ import annotations

import json
import sys

import click

from movelink.cli.output import linkage_to_dict, print_linkage
from movelink.core.description import load_description
from movelink.core.graph import build_graph
from movelink.core.linkage import LinkageResolver
from movelink.exceptions import DescriptionError, PackageError


@click.command("link")
@click.argument("description", type=click.Path(exists=True, dir_okay=False))
@click.option("--env", "-e", "env", required=True, help="Environment to resolve.")
@click.option(
    "--address-env",
    default=None,
    help="Environment whose published addresses classify conflicts (default: --env).",
)
@click.option("--json", "as_json", is_flag=True, help="Emit the result as JSON.")
def link_command(
    description: str,
    env: str,
    address_env: str | None,
    as_json: bool,
) -> None:
    """Resolve the linkage table of the root package in DESCRIPTION.

    Exit code 0 on success, 1 on linkage failure, 2 if the description
    cannot be loaded.
    """
    try:
        root, loader = load_description(description)
        graph = build_graph(root, loader, [env])
    except (DescriptionError, PackageError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    linkage = LinkageResolver(graph).resolve(env, address_env)

    if as_json:
        click.echo(json.dumps(linkage_to_dict(graph, linkage), indent=2, sort_keys=True))
    else:
        print_linkage(graph, linkage)

    sys.exit(0 if linkage.success else 1)

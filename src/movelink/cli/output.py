"""Rich output formatting helpers for the movelink CLI.

Provides the linkage table view, the failure panel, and the topological
graph listing, plus the JSON form of a linkage result.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from movelink.core.graph import NodeIndex, PackageGraph
from movelink.core.linkage import Linkage, abbreviate_address

console = Console()


def linkage_to_dict(graph: PackageGraph, linkage: Linkage) -> dict[str, Any]:
    """Convert a linkage result to a JSON-serializable dict."""
    table: dict[str, Any] = {}
    for original_id, node in linkage.table.items():
        package = graph.package(node)
        publication = package.publication(linkage.env)
        table[original_id] = {
            "node": node,
            "package": package.name,
            "path": package.path,
            "published_at": publication.published_at if publication else None,
        }
    data: dict[str, Any] = {
        "environment": linkage.env,
        "root": graph.package(graph.root).name,
        "success": linkage.success,
        "linkage": table,
    }
    if linkage.error is not None:
        data["error"] = linkage.error.to_dict()
    return data


def print_linkage(graph: PackageGraph, linkage: Linkage) -> None:
    """Print a linkage result: the table on success, the diagnostic on failure."""
    root_name = graph.package(graph.root).name
    if not linkage.success:
        console.print(
            Panel("[bold red]Linkage failed[/bold red]",
                  title=f"Linkage: {root_name} ({linkage.env})")
        )
        if linkage.error is not None:
            console.print(f"[red]{linkage.error.kind.name}[/red]")
            console.print(Text(linkage.error.message))
        return

    console.print(
        Panel("[bold green]Linkage resolved[/bold green]",
              title=f"Linkage: {root_name} ({linkage.env})")
    )
    if not linkage.table:
        console.print("[dim]No published dependencies to link.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Original ID", style="bold")
    table.add_column("Package")
    table.add_column("Published At")
    table.add_column("Path", style="dim")
    for original_id, node in linkage.table.items():
        package = graph.package(node)
        publication = package.publication(linkage.env)
        table.add_row(
            abbreviate_address(original_id),
            package.name,
            abbreviate_address(publication.published_at) if publication else "-",
            package.path or "-",
        )
    console.print(table)


def print_graph(graph: PackageGraph, env: str, order: list[NodeIndex]) -> None:
    """Print packages in ``order`` with their direct dependencies in ``env``."""
    table = Table(title=f"Dependency Graph ({env})", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Package", style="bold")
    table.add_column("Original ID")
    table.add_column("Dependencies")

    for position, node in enumerate(order):
        package = graph.package(node)
        publication = package.publication(env)
        overrides = {
            name for name, dep in package.deps.get(env, {}).items() if dep.is_override()
        }
        deps = []
        for edge in graph.edges(node, env):
            target = graph.package(edge.target).name
            label = edge.name if edge.name == target else f"{edge.name} ({target})"
            if edge.name in overrides:
                label += " [override]"
            deps.append(label)
        table.add_row(
            str(position),
            package.name,
            abbreviate_address(publication.original_id) if publication else "-",
            Text(", ".join(deps) or "-"),
        )
    console.print(table)
    console.print(f"[bold]{len(order)}[/bold] packages | {graph.edge_count} edges")

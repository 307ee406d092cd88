"""Override extraction: which direct dependencies of a node are overrides.

An override only settles conflicts in the linkage table of the node that
declares it. It never reaches back into the tables of its dependencies,
and ancestors do not inherit it.
"""

from __future__ import annotations

from movelink.core.graph import NodeIndex, PackageGraph
from movelink.core.linkage import diagnostics
from movelink.core.package import EnvironmentName, OriginalID
from movelink.exceptions import PackageError


def find_overrides(
    graph: PackageGraph, node: NodeIndex, env: EnvironmentName
) -> dict[OriginalID, NodeIndex]:
    """Map the original ID of each overriding direct dependency to its node.

    Args:
        graph: The package graph.
        node: Node whose manifest declares the overrides.
        env: Environment to read dependencies and publications from.

    Returns:
        Original ID -> node index, restricted to ``node``'s own edges whose
        manifest entry has ``override = true``.

    Raises:
        LinkageError: ``MISSING_ENVIRONMENT`` if the package does not
            declare ``env``; ``UNPUBLISHED_OVERRIDE`` if an override target
            has no publication in ``env``.
    """
    try:
        deps = graph.package(node).direct_deps(env)
    except PackageError as exc:
        raise diagnostics.missing_environment(graph, node, env, exc) from exc

    override_names = {name for name, dep in deps.items() if dep.is_override()}
    overrides: dict[OriginalID, NodeIndex] = {}
    for edge in graph.edges(node, env):
        if edge.name not in override_names:
            continue
        publication = graph.package(edge.target).publication(env)
        if publication is None:
            raise diagnostics.unpublished_override(graph, edge, env)
        overrides[publication.original_id] = edge.target
    return overrides

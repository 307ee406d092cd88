"""Render ``LinkageError`` messages from graph data.

Messages name the packages involved, the manifest the fix belongs in, the
dependency chain from the failing node to each conflicting package, and
abbreviated published addresses.
"""

from __future__ import annotations

from movelink.core.graph import DependencyEdge, NodeIndex, PackageGraph
from movelink.core.linkage.errors import LinkageError, LinkageErrorKind
from movelink.core.package import EnvironmentName, OriginalID, Package

_ADDRESS_HEAD = 6
_ADDRESS_TAIL = 4


def abbreviate_address(address: str) -> str:
    """Shorten a long hex address to ``0x1234..abcd``; short ones are unchanged."""
    if len(address) <= _ADDRESS_HEAD + _ADDRESS_TAIL + 2:
        return address
    return f"{address[:_ADDRESS_HEAD]}..{address[-_ADDRESS_TAIL:]}"


def format_chain(graph: PackageGraph, path: list[NodeIndex]) -> str:
    """Join the package names along ``path`` with arrows."""
    return " -> ".join(graph.package(n).name for n in path)


def _chain(
    graph: PackageGraph, start: NodeIndex, goal: NodeIndex, env: EnvironmentName
) -> str:
    path = graph.dependency_path(start, goal, env)
    return format_chain(graph, path or [start, goal])


def cyclic_dependencies(
    graph: PackageGraph, cycle: list[NodeIndex], env: EnvironmentName
) -> LinkageError:
    first = graph.package(cycle[0]).name if cycle else "<unknown>"
    return LinkageError(
        LinkageErrorKind.CYCLIC_DEPENDENCIES,
        f"Package {first} depends on itself in environment {env!r} "
        f"({format_chain(graph, cycle)})",
        root=cycle[0] if cycle else None,
        cycle=cycle,
    )


def missing_environment(
    graph: PackageGraph, node: NodeIndex, env: EnvironmentName, reason: Exception
) -> LinkageError:
    return LinkageError(
        LinkageErrorKind.MISSING_ENVIRONMENT,
        f"Cannot link package {graph.package(node).name} for environment "
        f"{env!r}: {reason}",
        root=node,
    )


def unpublished_override(
    graph: PackageGraph, edge: DependencyEdge, env: EnvironmentName
) -> LinkageError:
    owner = graph.package(edge.source)
    target = graph.package(edge.target)
    location = target.path or target.source
    described = f"{target.name} ({location})" if location else target.name
    return LinkageError(
        LinkageErrorKind.UNPUBLISHED_OVERRIDE,
        f"Package {owner.name} marks dependency `{edge.name}` as an override "
        f"in {owner.manifest_path}, but {described} "
        f"is not published in environment {env!r}",
        root=edge.source,
        node2=edge.target,
    )


def unpublished_package(
    graph: PackageGraph,
    root: NodeIndex,
    node1: NodeIndex,
    node2: NodeIndex,
    original_id: OriginalID,
    env: EnvironmentName,
    address_env: EnvironmentName,
) -> LinkageError:
    missing = [
        graph.package(n).name
        for n in (node1, node2)
        if not graph.package(n).is_published(address_env)
    ]
    return LinkageError(
        LinkageErrorKind.UNPUBLISHED_PACKAGE,
        f"Package {graph.package(root).name} reaches two packages for {original_id}:\n\n"
        f"  {_chain(graph, root, node1, env)}\n"
        f"  {_chain(graph, root, node2, env)}\n\n"
        f"but {' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} "
        f"not published in environment "
        f"{address_env!r}, so their addresses cannot be compared",
        root=root,
        node1=node1,
        node2=node2,
        original_id=original_id,
    )


def conflict(
    kind: LinkageErrorKind,
    graph: PackageGraph,
    root: NodeIndex,
    node1: NodeIndex,
    node2: NodeIndex,
    original_id: OriginalID,
    env: EnvironmentName,
    address_env: EnvironmentName,
) -> LinkageError:
    """Build an ``INCONSISTENT_LINKAGE`` or ``MULTIPLE_IMPLEMENTATIONS`` error.

    Both conflicting nodes must be published in ``address_env``.
    """
    owner = graph.package(root)
    first, second = graph.package(node1), graph.package(node2)
    pub1, pub2 = first.publication(address_env), second.publication(address_env)

    if kind is LinkageErrorKind.INCONSISTENT_LINKAGE:
        headline = (
            f"Package {owner.name} depends on different source packages for "
            f"{first.name} (original ID {abbreviate_address(original_id)}, "
            f"published at {abbreviate_address(pub1.published_at)}):"
        )
        lines = [
            f"  {_chain(graph, root, node1, env)} is {first.dep_for_self() or first.path}",
            f"  {_chain(graph, root, node2, env)} is {second.dep_for_self() or second.path}",
        ]
    else:
        headline = (
            f"Package {owner.name} depends on different versions of "
            f"{first.name} (original ID {abbreviate_address(original_id)}):"
        )
        lines = [
            f"  {_chain(graph, root, node1, env)} refers to version "
            f"{_version(pub1.version)} (published at {abbreviate_address(pub1.published_at)})",
            f"  {_chain(graph, root, node2, env)} refers to version "
            f"{_version(pub2.version)} (published at {abbreviate_address(pub2.published_at)})",
        ]

    fix = (
        f"To resolve this, add an override in {owner.name}'s manifest "
        f"({owner.manifest_path}):\n\n"
        f"  {first.name} = {{ {_manifest_dependency(first)}, override = true }}\n\n"
        f"  or\n\n"
        f"  {second.name} = {{ {_manifest_dependency(second)}, override = true }}"
    )
    return LinkageError(
        kind,
        "\n".join([headline, "", *lines, "", fix]),
        root=root,
        node1=node1,
        node2=node2,
        original_id=original_id,
    )


def _version(version: int | None) -> str:
    return "unknown" if version is None else str(version)


def _manifest_dependency(package: Package) -> str:
    """Manifest dependency fields that point at ``package``."""
    if package.path:
        return f'local = "{package.path}"'
    if package.source:
        return f'package = "{package.source}"'
    return "<dependency>"

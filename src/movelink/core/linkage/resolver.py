"""Linkage resolution: one package per original ID for the root package.

The resolver walks the graph bottom-up. Nodes are visited in reverse
topological order, so when a node is reached every one of its direct
dependencies already has a finished linkage table. A node's table is the
merge of, for each direct dependency in edge order, that dependency's own
original ID (if it is published) followed by that dependency's table.

Conflict policy when two different nodes claim the same original ID:

1. If the merging node declares an override for that ID, the override
   target wins.
2. Otherwise the published addresses of the two nodes are compared:
   equal addresses mean the registration data is inconsistent
   (``INCONSISTENT_LINKAGE``); different addresses mean two versions are
   genuinely required (``MULTIPLE_IMPLEMENTATIONS``).

Resolution stops at the first failure; no partial table is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from movelink.core.graph import DependencyCycleError, NodeIndex, PackageGraph
from movelink.core.linkage import diagnostics
from movelink.core.linkage.errors import LinkageError, LinkageErrorKind
from movelink.core.linkage.overrides import find_overrides
from movelink.core.package import EnvironmentName, OriginalID

logger = logging.getLogger(__name__)

LinkageTable = dict[OriginalID, NodeIndex]


# ---------------------------------------------------------------------------
# Linkage: result of a resolution request
# ---------------------------------------------------------------------------


@dataclass
class Linkage:
    """Result of linkage resolution for one environment.

    Attributes:
        env: Environment that was resolved.
        success: True if a table was produced.
        table: Original ID -> node index for the root, sorted by original
            ID. Empty if resolution failed.
        error: The failure, if any.
    """

    env: EnvironmentName
    success: bool
    table: LinkageTable = field(default_factory=dict)
    error: LinkageError | None = None

    def unwrap(self) -> LinkageTable:
        """Return the table, or raise the recorded ``LinkageError``."""
        if self.error is not None:
            raise self.error
        return dict(self.table)


# ---------------------------------------------------------------------------
# LinkageResolver
# ---------------------------------------------------------------------------


class LinkageResolver:
    """Compute the root's linkage table for an environment.

    The resolver keeps no state between calls; the same graph can be
    resolved repeatedly and for different environments.

    Args:
        graph: A fully built package graph.
    """

    def __init__(self, graph: PackageGraph) -> None:
        self._graph = graph

    def resolve(
        self,
        env: EnvironmentName,
        address_env: EnvironmentName | None = None,
    ) -> Linkage:
        """Resolve the root's linkage table.

        Args:
            env: Environment whose dependency edges, overrides and original
                IDs are used.
            address_env: Environment whose published addresses are compared
                when classifying a conflict. Defaults to ``env``.

        Returns:
            A ``Linkage``. On failure ``success`` is False and ``error``
            holds the first problem found.
        """
        try:
            table = self._compute(env, address_env or env)
        except LinkageError as exc:
            logger.debug("linkage for env %s failed: %s", env, exc.kind.name)
            return Linkage(env=env, success=False, error=exc)
        return Linkage(env=env, success=True, table=table)

    def _compute(self, env: EnvironmentName, address_env: EnvironmentName) -> LinkageTable:
        graph = self._graph
        try:
            order = graph.topological_order(env)
        except DependencyCycleError as exc:
            raise diagnostics.cyclic_dependencies(graph, exc.cycle, env) from exc

        # Keyed by node index; filled bottom-up so each lookup below hits a
        # finished table.
        linkages: dict[NodeIndex, LinkageTable] = {}
        for node in reversed(order):
            linkages[node] = self._link_node(node, linkages, env, address_env)
            logger.debug(
                "linked %s: %d entries", graph.package(node).name, len(linkages[node])
            )
        return linkages[graph.root]

    def _transitive_entries(
        self, node: NodeIndex, linkages: dict[NodeIndex, LinkageTable], env: EnvironmentName
    ) -> Iterator[tuple[OriginalID, NodeIndex]]:
        for dep in self._graph.dependencies(node, env):
            publication = self._graph.package(dep).publication(env)
            if publication is not None:
                yield publication.original_id, dep
            yield from linkages[dep].items()

    def _link_node(
        self,
        node: NodeIndex,
        linkages: dict[NodeIndex, LinkageTable],
        env: EnvironmentName,
        address_env: EnvironmentName,
    ) -> LinkageTable:
        overrides = find_overrides(self._graph, node, env)
        linkage: LinkageTable = {}
        for original_id, pkg in self._transitive_entries(node, linkages, env):
            old_pkg = linkage.get(original_id)
            if old_pkg is None:
                linkage[original_id] = pkg
                continue
            if old_pkg == pkg:
                continue
            if original_id in overrides:
                linkage[original_id] = overrides[original_id]
                continue
            raise self._conflict(node, old_pkg, pkg, original_id, env, address_env)

        # The node's own original ID is not part of its table.
        return dict(sorted(linkage.items()))

    def _conflict(
        self,
        node: NodeIndex,
        old_pkg: NodeIndex,
        new_pkg: NodeIndex,
        original_id: OriginalID,
        env: EnvironmentName,
        address_env: EnvironmentName,
    ) -> LinkageError:
        graph = self._graph
        old_package, new_package = graph.package(old_pkg), graph.package(new_pkg)
        if not (old_package.is_published(address_env) and new_package.is_published(address_env)):
            return diagnostics.unpublished_package(
                graph, node, old_pkg, new_pkg, original_id, env, address_env
            )
        old_pub = old_package.publication(address_env)
        new_pub = new_package.publication(address_env)
        if old_pub.published_at == new_pub.published_at:
            kind = LinkageErrorKind.INCONSISTENT_LINKAGE
        else:
            kind = LinkageErrorKind.MULTIPLE_IMPLEMENTATIONS
        logger.debug(
            "conflict in %s for %s: %s vs %s (%s)",
            graph.package(node).name, original_id,
            graph.package(old_pkg).name, graph.package(new_pkg).name, kind.name,
        )
        return diagnostics.conflict(
            kind, graph, node, old_pkg, new_pkg, original_id, env, address_env
        )


def _linkage(
    self: PackageGraph,
    env: EnvironmentName,
    address_env: EnvironmentName | None = None,
) -> LinkageTable:
    """Return the root's linkage table for ``env`` or raise ``LinkageError``."""
    return LinkageResolver(self).resolve(env, address_env).unwrap()

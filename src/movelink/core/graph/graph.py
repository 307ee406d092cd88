"""Package dependency graph: an arena of package nodes and labelled edges.

Nodes are stored in a list and addressed by integer ``NodeIndex``; edges
live in a separate list and point from a dependent to one of its direct
dependencies. Each edge carries the dependent's local name for the
dependency and the environment whose dependency view produced it, so a
single graph answers queries for every environment of the root.

The first node added is the root. Cycles are representable; they are
reported by ``find_cycle`` and ``topological_order`` rather than rejected
on insertion.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from dataclasses import dataclass

from movelink.core.package import EnvironmentName, Package, PackageName
from movelink.exceptions import DependencyCycleError, GraphError

logger = logging.getLogger(__name__)

NodeIndex = int


# ---------------------------------------------------------------------------
# PackageNode / DependencyEdge
# ---------------------------------------------------------------------------


@dataclass
class PackageNode:
    """A vertex in the package graph, owning one loaded package."""

    index: NodeIndex
    package: Package

    @property
    def name(self) -> PackageName:
        return self.package.name


@dataclass(frozen=True)
class DependencyEdge:
    """A "depends on" edge from ``source`` to ``target``.

    Attributes:
        source: Index of the dependent node.
        target: Index of the dependency node.
        name: Local name of the dependency in the dependent's manifest.
        environment: Environment the edge belongs to.
    """

    source: NodeIndex
    target: NodeIndex
    name: PackageName
    environment: EnvironmentName


# ---------------------------------------------------------------------------
# PackageGraph
# ---------------------------------------------------------------------------


class PackageGraph:
    """Dependency graph for one root package across its environments.

    Thread safety: This class is NOT thread-safe. Build it once, then treat
    it as read-only while resolving.
    """

    def __init__(self) -> None:
        self._nodes: list[PackageNode] = []
        self._edges: list[DependencyEdge] = []
        self._outgoing: dict[NodeIndex, list[int]] = defaultdict(list)

    # -- Construction -------------------------------------------------------

    def add_package(self, package: Package) -> NodeIndex:
        """Add a package as a new node and return its index.

        The first package added becomes the root.
        """
        index = len(self._nodes)
        self._nodes.append(PackageNode(index=index, package=package))
        return index

    def add_dependency(
        self,
        source: NodeIndex,
        target: NodeIndex,
        name: PackageName,
        environment: EnvironmentName,
    ) -> DependencyEdge:
        """Record that ``source`` depends on ``target`` in ``environment``.

        Args:
            source: Dependent node index.
            target: Dependency node index.
            name: Local dependency name in the dependent's manifest.
            environment: Environment of the dependency view.

        Returns:
            The new ``DependencyEdge``.

        Raises:
            GraphError: If either index does not name a node.
        """
        self._check_index(source)
        self._check_index(target)
        edge = DependencyEdge(
            source=source, target=target, name=name, environment=environment
        )
        self._outgoing[source].append(len(self._edges))
        self._edges.append(edge)
        return edge

    def _check_index(self, index: NodeIndex) -> None:
        if not 0 <= index < len(self._nodes):
            raise GraphError(f"Unknown node index {index} (graph has {len(self._nodes)} nodes)")

    # -- Queries ------------------------------------------------------------

    @property
    def root(self) -> NodeIndex:
        """Index of the root node."""
        if not self._nodes:
            raise GraphError("Graph is empty and has no root")
        return 0

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def nodes(self) -> list[PackageNode]:
        return list(self._nodes)

    def get_node(self, index: NodeIndex) -> PackageNode:
        """Return the node at ``index``.

        Raises:
            GraphError: If ``index`` does not name a node.
        """
        self._check_index(index)
        return self._nodes[index]

    def package(self, index: NodeIndex) -> Package:
        return self.get_node(index).package

    def edges(self, node: NodeIndex, env: EnvironmentName) -> list[DependencyEdge]:
        """Outgoing edges of ``node`` in ``env``, in insertion order."""
        self._check_index(node)
        return [
            self._edges[i]
            for i in self._outgoing.get(node, [])
            if self._edges[i].environment == env
        ]

    def dependencies(self, node: NodeIndex, env: EnvironmentName) -> list[NodeIndex]:
        """Direct dependency indices of ``node`` in ``env``, in edge order."""
        return [edge.target for edge in self.edges(node, env)]

    # -- Graph algorithms ---------------------------------------------------

    def reachable(self, env: EnvironmentName) -> list[NodeIndex]:
        """Nodes reachable from the root in ``env``, in depth-first preorder."""
        if not self._nodes:
            return []
        seen: set[NodeIndex] = set()
        order: list[NodeIndex] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node in seen:
                continue
            seen.add(node)
            order.append(node)
            stack.extend(reversed(self.dependencies(node, env)))
        return order

    def find_cycle(self, env: EnvironmentName) -> list[NodeIndex]:
        """Find one dependency cycle reachable from the root.

        Uses iterative DFS colouring so deep graphs do not exhaust the
        interpreter stack.

        Returns:
            The cycle as a node path with the first node repeated at the end
            (e.g. ``[1, 3, 1]``). Empty if ``env`` is acyclic.
        """
        WHITE, GRAY, BLACK = 0, 1, 2
        color: dict[NodeIndex, int] = {n: WHITE for n in self.reachable(env)}

        for start in color:
            if color[start] != WHITE:
                continue
            color[start] = GRAY
            path = [start]
            stack = [iter(self.dependencies(start, env))]
            while stack:
                for child in stack[-1]:
                    if color[child] == GRAY:
                        return path[path.index(child):] + [child]
                    if color[child] == WHITE:
                        color[child] = GRAY
                        path.append(child)
                        stack.append(iter(self.dependencies(child, env)))
                        break
                else:
                    color[path.pop()] = BLACK
                    stack.pop()
        return []

    def topological_order(self, env: EnvironmentName) -> list[NodeIndex]:
        """Order the reachable nodes so every dependent precedes its dependencies.

        Kahn's algorithm over the edges of ``env``; ties are broken by edge
        order, so the result is deterministic. The root is always first.

        Raises:
            DependencyCycleError: If the reachable subgraph has a cycle.
        """
        nodes = self.reachable(env)
        in_degree: dict[NodeIndex, int] = {n: 0 for n in nodes}
        for node in nodes:
            for target in self.dependencies(node, env):
                in_degree[target] += 1

        queue = deque(n for n in nodes if in_degree[n] == 0)
        order: list[NodeIndex] = []
        while queue:
            node = queue.popleft()
            order.append(node)
            for target in self.dependencies(node, env):
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    queue.append(target)

        if len(order) < len(nodes):
            cycle = self.find_cycle(env)
            names = " -> ".join(self._nodes[n].name for n in cycle)
            logger.debug("cycle detected in env %s: %s", env, names)
            raise DependencyCycleError(
                f"Dependencies in environment {env!r} are cyclic: {names}", cycle
            )
        return order

    def dependency_path(
        self, start: NodeIndex, goal: NodeIndex, env: EnvironmentName
    ) -> list[NodeIndex]:
        """Shortest chain of edges from ``start`` to ``goal`` (BFS).

        Returns:
            Node indices from ``start`` to ``goal`` inclusive, ``[start]`` if
            they are the same node, or an empty list if ``goal`` is not
            reachable.
        """
        parent: dict[NodeIndex, NodeIndex | None] = {start: None}
        queue: deque[NodeIndex] = deque([start])
        while queue:
            current = queue.popleft()
            if current == goal:
                path = [current]
                while parent[path[-1]] is not None:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            for target in self.dependencies(current, env):
                if target not in parent:
                    parent[target] = current
                    queue.append(target)
        return []

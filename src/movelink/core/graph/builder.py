"""Build a ``PackageGraph`` outward from a root package.

The loader turns a ``PinnedDependency`` into a ``Package``. Fetching and
pinning are the loader's business; by the time this module runs, every
dependency is pinned and the loader only has to hand back the package.
Nodes are keyed by dependency source, so two dependents that pin the same
source share one node and diamonds collapse.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Iterable

from movelink.core.graph.graph import NodeIndex, PackageGraph
from movelink.core.package import EnvironmentName, Package, PinnedDependency
from movelink.exceptions import PackageError

logger = logging.getLogger(__name__)

Loader = Callable[[PinnedDependency], Package]


def build_graph(
    root: Package,
    loader: Loader,
    environments: Iterable[EnvironmentName] | None = None,
) -> PackageGraph:
    """Assemble the dependency graph reachable from ``root``.

    Traverses breadth-first once per environment. Dependencies are visited
    in name order so the resulting edge order is deterministic.

    Args:
        root: The root package; it becomes node 0.
        loader: Callable returning the package for a pinned dependency.
            Its exceptions propagate unchanged.
        environments: Environments to traverse. Defaults to every
            environment the root declares.

    Returns:
        The populated ``PackageGraph``. Cycles are kept, not rejected.

    Raises:
        PackageError: If the root does not declare a requested environment.
    """
    graph = PackageGraph()
    root_index = graph.add_package(root)
    envs = sorted(root.environments if environments is None else set(environments))

    by_source: dict[str, NodeIndex] = {}
    if root.source:
        by_source[root.source] = root_index

    for env in envs:
        queue: deque[NodeIndex] = deque([root_index])
        visited: set[NodeIndex] = {root_index}
        while queue:
            index = queue.popleft()
            package = graph.package(index)
            try:
                deps = package.direct_deps(env)
            except PackageError:
                if index == root_index:
                    raise
                logger.warning(
                    "Package %s does not declare environment %s; no edges added",
                    package.name, env,
                )
                continue

            for name in sorted(deps):
                dep = deps[name]
                target = by_source.get(dep.source)
                if target is None:
                    target = graph.add_package(loader(dep))
                    by_source[dep.source] = target
                    logger.debug("loaded %s from %s", graph.package(target).name, dep.source)
                graph.add_dependency(index, target, name, env)
                if target not in visited:
                    visited.add(target)
                    queue.append(target)

    logger.debug(
        "built graph for %s: %d nodes, %d edges", root.name, graph.node_count, graph.edge_count
    )
    return graph

"""Package dependency graph and its construction from a root package."""

from movelink.core.graph.builder import Loader, build_graph
from movelink.core.graph.graph import (
    DependencyEdge,
    NodeIndex,
    PackageGraph,
    PackageNode,
)
from movelink.exceptions import DependencyCycleError

__all__ = [
    "DependencyCycleError",
    "DependencyEdge",
    "Loader",
    "NodeIndex",
    "PackageGraph",
    "PackageNode",
    "build_graph",
]

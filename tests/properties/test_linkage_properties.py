"""Property-based tests for linkage resolution invariants.

Verifies on randomly generated graphs:
- Termination: every acyclic graph resolves; every cyclic one reports a cycle
- Idempotence: same graph and environment -> same table
- Single mapping: each original ID maps to exactly one reachable node
- Completeness: without collisions, the root's table holds the original ID
  of every published package below it
"""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from movelink.core.graph import PackageGraph
from movelink.core.linkage import LinkageErrorKind, LinkageResolver
from movelink.core.package import Package, Publication

ENV = "mainnet"


# ---------------------------------------------------------------------------
# Strategies for generating random package graphs
# ---------------------------------------------------------------------------


@st.composite
def acyclic_graph(draw: st.DrawFn) -> PackageGraph:
    """Generate a DAG: edges only go from lower to higher node indices.

    Every non-root node is published under its own original ID, so no two
    nodes ever collide.
    """
    size = draw(st.integers(min_value=1, max_value=8))
    graph = PackageGraph()
    for i in range(size):
        publications = {ENV: Publication(f"0x{i:02x}", f"0x{i:02x}", 1)} if i else {}
        graph.add_package(Package(name=f"pkg{i}", environments={ENV}, publications=publications))
    for source in range(size):
        for target in range(source + 1, size):
            if draw(st.booleans()):
                graph.add_dependency(source, target, f"pkg{target}", ENV)
    return graph


@st.composite
def cyclic_graph(draw: st.DrawFn) -> PackageGraph:
    """Generate a DAG, then close a cycle through a chain from the root."""
    graph = draw(acyclic_graph())
    size = graph.node_count
    length = draw(st.integers(min_value=1, max_value=max(1, size)))
    chain = list(range(length))
    for source, target in zip(chain, chain[1:]):
        graph.add_dependency(source, target, f"pkg{target}", ENV)
    back_to = draw(st.integers(min_value=0, max_value=length - 1))
    graph.add_dependency(chain[-1], back_to, f"pkg{back_to}", ENV)
    return graph


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@given(graph=acyclic_graph())
@settings(max_examples=100)
def test_acyclic_graphs_resolve(graph: PackageGraph) -> None:
    linkage = LinkageResolver(graph).resolve(ENV)
    assert linkage.success is True
    assert linkage.error is None


@given(graph=acyclic_graph())
@settings(max_examples=100)
def test_table_covers_reachable_published_packages(graph: PackageGraph) -> None:
    table = LinkageResolver(graph).resolve(ENV).table
    expected = {
        graph.package(n).publication(ENV).original_id: n
        for n in graph.reachable(ENV)
        if n != graph.root
    }
    assert table == expected


@given(graph=acyclic_graph())
@settings(max_examples=50)
def test_resolution_idempotent(graph: PackageGraph) -> None:
    resolver = LinkageResolver(graph)
    first = resolver.resolve(ENV)
    second = resolver.resolve(ENV)
    assert first.table == second.table
    assert list(first.table) == list(second.table)


@given(graph=cyclic_graph())
@settings(max_examples=100)
def test_cyclic_graphs_report_a_cycle(graph: PackageGraph) -> None:
    linkage = LinkageResolver(graph).resolve(ENV)
    assert linkage.success is False
    assert linkage.table == {}
    error = linkage.error
    assert error.kind is LinkageErrorKind.CYCLIC_DEPENDENCIES
    cycle = error.cycle
    assert cycle[0] == cycle[-1]
    for source, target in zip(cycle, cycle[1:]):
        assert target in graph.dependencies(source, ENV)

"""Linkage resolution --- one concrete package per original ID.

The package is split into focused submodules:

- ``errors``: ``LinkageError`` and its ``LinkageErrorKind`` tag.
- ``diagnostics``: message rendering for every failure kind.
- ``overrides``: ``find_overrides``, the per-node override extractor.
- ``resolver``: ``LinkageResolver`` and its ``Linkage`` result.

``PackageGraph.linkage`` is attached here so that
``graph.linkage("mainnet")`` works once this package is imported.
"""

from movelink.core.graph import PackageGraph
from movelink.core.linkage.diagnostics import abbreviate_address
from movelink.core.linkage.errors import LinkageError, LinkageErrorKind
from movelink.core.linkage.overrides import find_overrides
from movelink.core.linkage.resolver import (
    Linkage,
    LinkageResolver,
    LinkageTable,
    _linkage,
)

PackageGraph.linkage = _linkage

__all__ = [
    "Linkage",
    "LinkageError",
    "LinkageErrorKind",
    "LinkageResolver",
    "LinkageTable",
    "abbreviate_address",
    "find_overrides",
]

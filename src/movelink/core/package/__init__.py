"""Package model consumed by the dependency graph.

Packages are produced by an external loader (manifest parsing, fetching and
pinning all happen before a package reaches this layer). Re-exported here so
callers can write ``from movelink.core.package import Package``.
"""

from movelink.core.package.models import (
    EnvironmentName,
    OriginalID,
    Package,
    PackageName,
    PinnedDependency,
    Publication,
)

__all__ = [
    "EnvironmentName",
    "OriginalID",
    "Package",
    "PackageName",
    "PinnedDependency",
    "Publication",
]

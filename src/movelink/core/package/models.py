"""Package data models: publications, pinned dependencies, and packages.

A ``Package`` is the per-manifest view of one package instance. It knows
its pinned direct dependencies for each environment it declares and, where
it has been published, the ``Publication`` record for that environment.
These are plain data holders; nothing here performs I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from movelink.exceptions import PackageError

logger = logging.getLogger(__name__)

EnvironmentName = str
PackageName = str
OriginalID = str


# ---------------------------------------------------------------------------
# Publication: on-chain record of one package instance in one environment
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Publication:
    """Where a package instance was published in one environment.

    Attributes:
        original_id: Stable cross-version identity of the package. Every
            upgrade of the same package shares it.
        published_at: Address of this specific instance.
        version: On-chain version number, if known.
    """

    original_id: OriginalID
    published_at: str
    version: int | None = None


# ---------------------------------------------------------------------------
# PinnedDependency: one manifest dependency after pinning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PinnedDependency:
    """A direct dependency whose source has already been pinned.

    Attributes:
        source: Loader-specific identity of the pinned source (a git
            revision, a local path, a description key). Equal sources denote
            the same package instance.
        override: True if the manifest marks this dependency as an override.
    """

    source: str
    override: bool = False

    def is_override(self) -> bool:
        return self.override


# ---------------------------------------------------------------------------
# Package
# ---------------------------------------------------------------------------


@dataclass
class Package:
    """A loaded package: manifest-derived dependencies plus publish data.

    Attributes:
        name: Package name from the manifest.
        path: Directory the package was loaded from; used in diagnostics.
        source: How a dependency on this package is written down.
        environments: Environments declared in the manifest.
        deps: Pinned direct dependencies per environment, keyed by the
            local dependency name.
        publications: Publish record per environment.
    """

    name: PackageName
    path: str = ""
    source: str = ""
    environments: set[EnvironmentName] = field(default_factory=set)
    deps: dict[EnvironmentName, dict[PackageName, PinnedDependency]] = field(
        default_factory=dict
    )
    publications: dict[EnvironmentName, Publication] = field(default_factory=dict)

    @property
    def manifest_path(self) -> str:
        """Path of the manifest this package was read from."""
        if not self.path:
            return "Move.toml"
        return f"{self.path.rstrip('/')}/Move.toml"

    def dep_for_self(self) -> str:
        """A dependency source that points at this package."""
        return self.source

    def direct_deps(self, env: EnvironmentName) -> dict[PackageName, PinnedDependency]:
        """Return the pinned direct dependencies for ``env``.

        Args:
            env: Environment name.

        Returns:
            Mapping of local dependency name to pinned dependency. Empty if
            the environment is declared but has no dependencies.

        Raises:
            PackageError: If ``env`` is not declared in the manifest.
        """
        logger.debug("requested deps for %s in env %s", self.name, env)
        if env not in self.environments:
            raise PackageError(
                f"Package {self.name} does not have `{env}` defined as an "
                f"environment in its manifest ({self.manifest_path})"
            )
        return dict(self.deps.get(env, {}))

    def publication(self, env: EnvironmentName) -> Publication | None:
        """Return the publish record for ``env``, or None if unpublished there."""
        return self.publications.get(env)

    def is_published(self, env: EnvironmentName) -> bool:
        return env in self.publications

"""Load a package graph description from YAML.

Format::

    root: app
    packages:
      app:
        path: ./app
        environments: [mainnet]
        dependencies:
          mainnet:
            Sui: {package: sui}
            Token: {package: token_v2, override: true}
      sui:
        environments: [mainnet]
        published:
          mainnet: {original_id: "0x2", published_at: "0x2", version: 1}

Each dependency's ``package`` key becomes the pinned source of the
dependency, so two dependents naming the same key share one graph node.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from movelink.core.package import Package, PinnedDependency, Publication
from movelink.exceptions import DescriptionError

logger = logging.getLogger(__name__)


class DescriptionLoader:
    """Loader callable for ``build_graph`` backed by a parsed description."""

    def __init__(self, packages: dict[str, Package]) -> None:
        self._packages = packages

    def __call__(self, dep: PinnedDependency) -> Package:
        try:
            return self._packages[dep.source]
        except KeyError:
            raise DescriptionError(
                f"Dependency refers to undefined package {dep.source!r}"
            ) from None


def _mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DescriptionError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _sequence(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DescriptionError(f"{where} must be a list, got {type(value).__name__}")
    return value


def _address(entry: dict[str, Any], field: str, where: str) -> str:
    value = entry[field]
    # Unquoted hex such as 0x2a is read by YAML as an integer.
    if not isinstance(value, str):
        raise DescriptionError(
            f"{where}.{field} must be a quoted string, got {type(value).__name__} {value!r}"
        )
    return value


def _parse_dependency(key: str, env: str, name: str, raw: Any) -> PinnedDependency:
    if isinstance(raw, str):
        return PinnedDependency(source=raw)
    entry = _mapping(raw, f"packages.{key}.dependencies.{env}.{name}")
    if "package" not in entry:
        raise DescriptionError(
            f"Dependency {name!r} of {key!r} in {env!r} has no 'package' key"
        )
    return PinnedDependency(
        source=str(entry["package"]), override=bool(entry.get("override", False))
    )


def _parse_publication(key: str, env: str, raw: Any) -> Publication:
    where = f"packages.{key}.published.{env}"
    entry = _mapping(raw, where)
    try:
        version = entry.get("version")
        return Publication(
            original_id=_address(entry, "original_id", where),
            published_at=_address(entry, "published_at", where),
            version=int(version) if version is not None else None,
        )
    except KeyError as exc:
        raise DescriptionError(
            f"Publication of {key!r} in {env!r} is missing {exc.args[0]!r}"
        ) from None
    except (TypeError, ValueError):
        raise DescriptionError(
            f"Publication of {key!r} in {env!r} has a non-integer version"
        ) from None


def _parse_package(key: str, raw: Any) -> Package:
    entry = _mapping(raw, f"packages.{key}")
    deps: dict[str, dict[str, PinnedDependency]] = {}
    for env, env_deps in _mapping(entry.get("dependencies"), f"packages.{key}.dependencies").items():
        deps[str(env)] = {
            str(name): _parse_dependency(key, env, str(name), dep)
            for name, dep in _mapping(env_deps, f"packages.{key}.dependencies.{env}").items()
        }
    publications = {
        str(env): _parse_publication(key, env, pub)
        for env, pub in _mapping(entry.get("published"), f"packages.{key}.published").items()
    }
    environments = set(_sequence(entry.get("environments"), f"packages.{key}.environments"))
    # Environments named under dependencies or published are implicitly declared.
    environments |= set(deps) | set(publications)
    return Package(
        name=str(entry.get("name", key)),
        path=str(entry.get("path", "")),
        source=key,
        environments={str(e) for e in environments},
        deps=deps,
        publications=publications,
    )


def parse_description(data: Any) -> tuple[Package, DescriptionLoader]:
    """Build the root package and a loader from an already-parsed document.

    Raises:
        DescriptionError: If the document is malformed or the root key is
            not defined.
    """
    document = _mapping(data, "description")
    packages_raw = _mapping(document.get("packages"), "packages")
    packages = {str(key): _parse_package(str(key), raw) for key, raw in packages_raw.items()}

    root_key = document.get("root")
    if root_key is None:
        raise DescriptionError("Description has no 'root' key")
    root = packages.get(str(root_key))
    if root is None:
        raise DescriptionError(f"Root package {root_key!r} is not defined under 'packages'")
    logger.debug("parsed description with %d packages, root %s", len(packages), root_key)
    return root, DescriptionLoader(packages)


def load_description(path: Path | str) -> tuple[Package, DescriptionLoader]:
    """Read and parse a YAML description file.

    Raises:
        DescriptionError: If the file cannot be read, is not valid YAML, or
            is malformed.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, yaml.YAMLError) as exc:
        raise DescriptionError(f"Cannot load description {path}: {exc}") from exc
    return parse_description(data)

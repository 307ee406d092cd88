"""Shared fixtures for movelink tests."""

import pathlib

import pytest

DIAMOND_YAML = """\
root: app
packages:
  app:
    path: ./app
    environments: [mainnet, testnet]
    dependencies:
      mainnet:
        A: {package: a}
        B: {package: b}
  a:
    name: A
    path: ./deps/a
    environments: [mainnet]
    dependencies:
      mainnet:
        Lib: lib
    published:
      mainnet: {original_id: "0xa", published_at: "0xa", version: 1}
  b:
    name: B
    path: ./deps/b
    environments: [mainnet]
    dependencies:
      mainnet:
        Lib: lib
    published:
      mainnet: {original_id: "0xb", published_at: "0xb", version: 1}
  lib:
    name: Lib
    path: ./deps/lib
    environments: [mainnet]
    published:
      mainnet: {original_id: "0x11", published_at: "0x11", version: 1}
"""

CONFLICT_YAML = """\
root: app
packages:
  app:
    path: ./app
    environments: [mainnet]
    dependencies:
      mainnet:
        A: {package: a}
        B: {package: b}
  a:
    name: A
    environments: [mainnet]
    dependencies:
      mainnet:
        Lib: lib_v1
  b:
    name: B
    environments: [mainnet]
    dependencies:
      mainnet:
        Lib: lib_v2
  lib_v1:
    name: Lib
    path: ./deps/lib-v1
    environments: [mainnet]
    published:
      mainnet: {original_id: "0x11", published_at: "0x11", version: 1}
  lib_v2:
    name: Lib
    path: ./deps/lib-v2
    environments: [mainnet]
    published:
      mainnet: {original_id: "0x11", published_at: "0x22", version: 2}
"""


@pytest.fixture
def diamond_description(tmp_path: pathlib.Path) -> pathlib.Path:
    """A description whose two branches share one library node."""
    path = tmp_path / "packages.yaml"
    path.write_text(DIAMOND_YAML)
    return path


@pytest.fixture
def conflict_description(tmp_path: pathlib.Path) -> pathlib.Path:
    """A description whose branches need two versions of one library."""
    path = tmp_path / "conflict.yaml"
    path.write_text(CONFLICT_YAML)
    return path

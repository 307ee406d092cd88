"""YAML package-graph descriptions.

A description file lists every package of a graph by key, with its
per-environment dependencies and publications. It stands in for the
manifest/lockfile loader when driving the resolver from the command line.
"""

from movelink.core.description.loader import (
    DescriptionLoader,
    load_description,
    parse_description,
)

__all__ = ["DescriptionLoader", "load_description", "parse_description"]

"""movelink CLI --- inspect and resolve package linkage.

Entry point for the ``movelink`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    link   --- Resolve the root package's linkage table for an environment.
    graph  --- Show the dependency graph in topological order.

Usage::

    movelink link packages.yaml --env mainnet
    movelink link packages.yaml --env testnet --address-env mainnet --json
    movelink graph packages.yaml --env mainnet
"""

from __future__ import annotations

import logging

import click

from movelink import __version__
from movelink.cli.graph_cmd import graph_command
from movelink.cli.link_cmd import link_command

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """movelink: Linkage resolution for on-chain package dependency graphs.

    Reads a YAML description of a package graph and computes, per
    environment, which published package instance satisfies each
    original ID.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )


cli.add_command(link_command)
cli.add_command(graph_command)

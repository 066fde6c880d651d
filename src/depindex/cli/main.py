"""depindex CLI: resolve pinned library dependencies from a manifest.

Entry point for the ``depindex`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve   - Resolve a consistent configuration for a root library.
    versions  - List the registered versions of a library.

Usage::

    depindex resolve deps.yaml Root
    depindex resolve deps.yaml Root --format json --output deps-lock.json
    depindex versions deps.yaml Root
    depindex --log-level DEBUG resolve deps.yaml Root
"""

from __future__ import annotations

import logging

import click

from depindex import __version__
from depindex.cli.resolve_cmd import resolve_command
from depindex.cli.versions_cmd import versions_command

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="DEPINDEX_LOG_LEVEL",
    show_default=True,
    help="Logging verbosity (also read from DEPINDEX_LOG_LEVEL).",
)
def cli(log_level: str) -> None:
    """depindex: Pinned library-dependency registry and resolver.

    Load exact-version pins from a YAML manifest and compute one
    consistent version per library reachable from a root.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(getattr(logging, log_level.upper()))


cli.add_command(resolve_command)
cli.add_command(versions_command)

"""CLI entry point — Click command group."""

from __future__ import annotations

import logging

import click

from pkgenv import __version__


@click.group()
@click.version_option(__version__, prog_name="pkgenv")
@click.option("-v", "--verbose", is_flag=True, help="Log probe activity to stderr.")
def cli(verbose: bool) -> None:
    """pkgenv — infer a project's environment from its marker files.

    Walks up from a directory, recognising manifests, lockfiles and
    version-pin files, and reports the packages, version, env and root
    they imply.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# Register all sub-commands on import
from pkgenv.cli import commands as _commands  # noqa: F401, E402

"""CLI commands — resolve, readme, config."""

from __future__ import annotations

import json
from pathlib import Path

import click
import yaml

from pkgenv import templates
from pkgenv.cli import cli
from pkgenv.core import paths
from pkgenv.core.errors import VirtualEnvError
from pkgenv.repo import config

# Failures a resolution may surface; all become a one-line CLI error.
_RESOLUTION_ERRORS = (VirtualEnvError, ValueError, OSError, yaml.YAMLError)


# ── resolve ─────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--path", "start", default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory to resolve from.",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON document.")
@click.option("--shell", "as_shell", is_flag=True, help="Print export lines for eval.")
def resolve(start: str, as_json: bool, as_shell: bool) -> None:
    """Resolve the virtual environment for a directory."""
    from pkgenv.services.virtualenv import Resolver

    if as_json and as_shell:
        raise click.UsageError("--json and --shell are mutually exclusive")

    try:
        venv = Resolver(config.Settings.load()).resolve(Path(start))
    except _RESOLUTION_ERRORS as exc:
        raise click.ClickException(_describe(exc)) from exc

    if as_json:
        click.echo(json.dumps(templates.as_dict(venv), indent=2))
    elif as_shell:
        click.echo(templates.render_shell(venv))
    else:
        click.echo(templates.render_summary(venv))


# ── readme ──────────────────────────────────────────────────────────


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def readme(file: Path) -> None:
    """Show the dependencies and version a markdown FILE declares."""
    from pkgenv.services import readme as readme_parser

    try:
        info = readme_parser.read(file)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    if info.version:
        click.echo(f"version: {info.version}")
    if not info.pkgs:
        click.echo("No dependency table found.")
        return
    for pkg in info.pkgs:
        click.echo(f"  {pkg}")


# ── config ──────────────────────────────────────────────────────────


@cli.command("config")
@click.option("--write", is_flag=True, help="Save the effective settings to config.toml.")
def show_config(write: bool) -> None:
    """Print the effective settings as TOML."""
    settings = config.Settings.load()
    click.echo(config.dump(settings), nl=False)
    if write:
        dest = paths.config_path(settings.home)
        config.save(settings, dest)
        click.echo(f"✔ Wrote {dest}")


# ── helpers ─────────────────────────────────────────────────────────


def _describe(exc: BaseException) -> str:
    notes = getattr(exc, "__notes__", None) or []
    return " ".join([str(exc), *(f"({note})" for note in notes)])

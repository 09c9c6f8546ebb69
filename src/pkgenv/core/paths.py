"""Path constants and filesystem-boundary helpers."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIR = Path(".config") / "pkgenv"
CONFIG_TOML = "config.toml"
DEFAULT_PREFIX = ".pkgenv"

# Candidate README extensions, tried in this order.
MARKDOWN_EXTENSIONS = (
    "md",
    "mkd",
    "mdwn",
    "mdown",
    "mdtxt",
    "mdtext",
    "markdown",
    "text",
    "md.txt",
)


def home() -> Path:
    return Path.home()


def is_fs_root(path: Path) -> bool:
    return path.parent == path


def ascent(start: Path, home_dir: Path, stop_at: Path | None = None) -> list[Path]:
    """Directories to probe walking up from *start*, closest first.

    *start* equal to *home_dir* is probed alone. Otherwise home and the
    filesystem root bound the walk and are not included, except that
    reaching *stop_at* probes it and ends the walk even when it is one
    of those bounds.
    """
    if start == home_dir:
        return [start]

    dirs: list[Path] = []
    current = start
    while True:
        if stop_at is not None and current == stop_at:
            dirs.append(current)
            break
        if current == home_dir or is_fs_root(current):
            break
        dirs.append(current)
        current = current.parent
    return dirs


def config_path(home_dir: Path | None = None, override: str | None = None) -> Path:
    """``$PKGENV_CONFIG`` when given, else ``~/.config/pkgenv/config.toml``."""
    if override is None:
        override = os.environ.get("PKGENV_CONFIG", "")
    if override.strip():
        return Path(override.strip()).expanduser()
    return (home_dir or home()) / CONFIG_DIR / CONFIG_TOML


def default_prefix(home_dir: Path | None = None) -> Path:
    return (home_dir or home()) / DEFAULT_PREFIX

"""``PKGENV_*`` settings read from the environment and user env files.

Variables already set in the process environment win; after that the
first env file that defines a key wins. Env files are read, never
exported into ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

PREFIX = "PKGENV_"


def user_env_files(home: Path, environ: Mapping[str, str] | None = None) -> list[Path]:
    """Candidate env files, highest priority first."""
    environ = os.environ if environ is None else environ
    files: list[Path] = []

    explicit = environ.get("PKGENV_ENV_FILE", "").strip()
    if explicit:
        files.append(Path(explicit).expanduser())

    pkgenv_home = environ.get("PKGENV_HOME", "").strip()
    if pkgenv_home:
        files.append(Path(pkgenv_home).expanduser() / ".env")

    files.append(home / ".config" / "pkgenv" / "env")
    files.append(home / ".config" / "pkgenv" / ".env")
    return files


def pkgenv_vars(home: Path, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Effective ``PKGENV_*`` variables with blank values dropped."""
    environ = os.environ if environ is None else environ
    merged: dict[str, str] = {}

    for path in reversed(user_env_files(home, environ)):
        if path.is_file():
            merged.update(
                (key, value)
                for key, value in parse_env_lines(path.read_text())
                if key.startswith(PREFIX)
            )
    merged.update((key, value) for key, value in environ.items() if key.startswith(PREFIX))

    return {key: value.strip() for key, value in merged.items() if value.strip()}


def parse_env_lines(text: str) -> list[tuple[str, str]]:
    """``KEY=VALUE`` pairs; ``export`` prefixes and matching quotes are dropped."""
    pairs: list[tuple[str, str]] = []
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if line.startswith("#") or not sep or not key:
            continue
        value = value.strip()
        if value[:1] in {"'", '"'} and len(value) >= 2 and value[-1] == value[0]:
            value = value[1:-1]
        pairs.append((key, value))
    return pairs

"""Text renderings of a resolved virtual environment."""

from __future__ import annotations

import shlex

from pkgenv.core.models import VirtualEnv


def as_dict(venv: VirtualEnv) -> dict:
    """JSON-ready view; requirement order is preserved."""
    return {
        "srcroot": str(venv.srcroot),
        "version": str(venv.version) if venv.version else None,
        "pkgs": [str(pkg) for pkg in venv.pkgs],
        "teafiles": [str(path) for path in venv.teafiles],
        "env": dict(venv.env),
    }


def render_shell(venv: VirtualEnv) -> str:
    """``export`` lines suitable for ``eval``."""
    lines = [f"export SRCROOT={shlex.quote(str(venv.srcroot))}"]
    if venv.version:
        lines.append(f"export VERSION={shlex.quote(str(venv.version))}")
    for key, value in venv.env.items():
        lines.append(f"export {key}={shlex.quote(value)}")
    return "\n".join(lines)


def render_summary(venv: VirtualEnv) -> str:
    lines = [f"srcroot: {venv.srcroot}"]
    if venv.version:
        lines.append(f"version: {venv.version}")

    lines.append("")
    lines.append(f"Packages ({len(venv.pkgs)}):")
    lines.extend(f"  {pkg}" for pkg in venv.pkgs)

    if venv.env:
        lines.append("")
        lines.append("Environment:")
        lines.extend(f"  {key}={value}" for key, value in venv.env.items())

    if venv.teafiles:
        lines.append("")
        lines.append("Found in:")
        lines.extend(f"  → {path}" for path in venv.teafiles)

    return "\n".join(lines)

"""Front matter: dependency/env declarations in native or host documents.

Native documents (``tea.yml``, the ``tea`` key of ``package.json``) are
plain mappings. Host documents (``Cargo.toml``, ``go.mod``, ``Gemfile``,
…) carry a YAML block fenced by ``---`` lines inside their own comment
syntax::

    # ---
    # dependencies:
    #   nodejs.org: ^18
    # env:
    #   NODE_ENV: development
    # ---
"""

from __future__ import annotations

import re
import textwrap
from pathlib import Path
from typing import Any

import yaml

from pkgenv.core import versions
from pkgenv.core.models import FrontMatter, PackageRequirement

_OPEN = re.compile(r"^((/\*|#|//)\s*)?---")
_CLOSE = re.compile(r"^((#|//)\s*)?---(\s*\*/)?$")
_COMMENT_LEADER = re.compile(r"^(#|//)")


def read_embedded(path: Path) -> FrontMatter | None:
    """Extract and refine the YAML block embedded in *path*, if any."""
    raw = extract_yaml_block(path.read_text())
    if raw is None:
        return None
    return refine(yaml.safe_load(raw))


def read_native(path: Path) -> FrontMatter:
    return refine(yaml.safe_load(path.read_text()))


def extract_yaml_block(text: str) -> str | None:
    """Return the text between the ``---`` fences, comment leaders removed.

    An unterminated block counts as no block.
    """
    block: list[str] | None = None
    for line in text.split("\n"):
        stripped = line.strip()
        if block is None:
            if _OPEN.match(stripped):
                block = []
            continue
        if _CLOSE.match(stripped):
            return textwrap.dedent("\n".join(block) + "\n")
        block.append(_COMMENT_LEADER.sub("", line, count=1))
    return None


def refine(obj: Any) -> FrontMatter:
    """Coerce a parsed mapping into :class:`FrontMatter`.

    ``dependencies`` may be a mapping, a whitespace-separated string or a
    list of requirement tokens. Non-mappings refine to nothing.
    """
    fm = FrontMatter()
    if not isinstance(obj, dict):
        return fm

    fm.pkgs = _refine_dependencies(obj.get("dependencies"))

    env = obj.get("env")
    if isinstance(env, dict):
        for key, value in env.items():
            fm.env[str(key)] = _stringify(value)

    return fm


def _refine_dependencies(deps: Any) -> list[PackageRequirement]:
    if isinstance(deps, dict):
        return [
            versions.parse_requirement(f"{project}@{_stringify(constraint) or '*'}")
            for project, constraint in deps.items()
        ]
    if isinstance(deps, str):
        return [versions.parse_requirement(token) for token in deps.split()]
    if isinstance(deps, list):
        return [versions.parse_requirement(str(token)) for token in deps]
    return []


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

"""Harvest dependencies and a version from README-style markdown.

Two tables are recognised, each introduced by its own header::

    # Dependencies

    | Project    | Version |
    | ---------- | ------- |
    | nodejs.org | ^18     |

    # Metadata

    | Key     | Value |
    | ------- | ----- |
    | Version | 1.2.3 |

Without a Metadata version, a trailing version on the document's first
header (``# my-project v1.2.3``) is used instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from semantic_version import Version

from pkgenv.core import versions
from pkgenv.core.models import PackageRequirement

# Our own docs show the feature via this heredoc; its table is not real.
EXAMPLE_SNIPPET_MARKER = "$ cat <<EOF >>my-project/README.md"

_SEPARATOR = re.compile(r"^\|\s*:?-+:?\s*\|\s*:?-+:?\s*\|(\s*:?-+:?\s*\|)?\s*$")
_ROW = re.compile(r"^\|([^|]+)\|([^|]+)\|")
_HEADER = re.compile(r"^#+")
_HEADER_VERSION = re.compile(rf"v?({versions.SEMVER_PATTERN})$")


@dataclass
class ReadmeInfo:
    version: Version | None = None
    pkgs: list[PackageRequirement] = field(default_factory=list)


def read(path: Path) -> ReadmeInfo:
    return parse(path.read_text())


def parse(text: str) -> ReadmeInfo:
    """Parse markdown *text*. Malformed dependency constraints raise ``ValueError``."""
    lines = text.split("\n")

    pkgs = [
        PackageRequirement(project=project, constraint=versions.parse_range(constraint))
        for project, constraint in find_table(lines, "Dependencies")
    ]
    version = _version_from_metadata(lines)
    if version is None:
        version = _version_from_first_header(lines)

    return ReadmeInfo(version=version, pkgs=pkgs)


def find_table(lines: list[str], title: str) -> list[tuple[str, str]]:
    """Rows of the first two-column table under a ``# <title>`` header.

    Collection ends at the first line that is not a row; there is no
    second table.
    """
    header = re.compile(rf"^#+\s*{re.escape(title)}\s*$")
    state = "seeking-header"
    prevline = ""
    rows: list[tuple[str, str]] = []

    for line in lines:
        if state == "seeking-separator":
            if not line.strip():
                continue
            if _SEPARATOR.match(line):
                state = "reading-rows"
        elif state == "reading-rows":
            match = _ROW.match(line)
            if not match:
                break
            rows.append((match.group(1).strip(), match.group(2).strip()))
        elif header.match(line) and prevline != EXAMPLE_SNIPPET_MARKER:
            state = "seeking-separator"
        prevline = line

    return rows


def _version_from_metadata(lines: list[str]) -> Version | None:
    for key, value in find_table(lines, "Metadata"):
        if key.lower() == "version" and value:
            return versions.coerce(value)
    return None


def _version_from_first_header(lines: list[str]) -> Version | None:
    for line in lines:
        line = line.strip()
        if _HEADER.match(line):
            match = _HEADER_VERSION.search(line)
            return versions.coerce(match.group(1)) if match else None
    return None

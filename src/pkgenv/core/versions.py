"""Version, range and requirement parsing on top of ``semantic_version``."""

from __future__ import annotations

import re

from semantic_version import NpmSpec, Version

from pkgenv.core.models import PackageRequirement

SEMVER_PATTERN = (
    r"\d+\.\d+\.\d+"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
)

_FULL = re.compile(rf"^{SEMVER_PATTERN}$")
_PARTIAL = re.compile(r"^\d+(?:\.\d+)?$")
_REQUIREMENT = re.compile(r"^(?P<project>[^@^~=<>!*\s]+)\s*(?P<constraint>[@^~=<>!*].*)?$")


def coerce(text: str) -> Version:
    """Parse *text* as a version, padding ``1`` / ``1.2`` to three parts.

    Raises ``ValueError`` for anything else.
    """
    s = text.strip()
    if s.startswith("v"):
        s = s[1:]
    if _FULL.match(s):
        return Version(s)
    if _PARTIAL.match(s):
        return Version.coerce(s)
    raise ValueError(f"Invalid version: {text!r}")


def parse(text: object) -> Version | None:
    """Lenient form of :func:`coerce`; non-strings and junk give ``None``."""
    if not isinstance(text, str):
        return None
    try:
        return coerce(text)
    except ValueError:
        return None


def parse_range(text: str) -> NpmSpec:
    s = text.strip()
    if not s:
        raise ValueError("Empty version range")
    return NpmSpec(s)


def parse_requirement(text: str) -> PackageRequirement:
    """Parse ``project[@version|<op>range]`` into a requirement.

    ``@`` introduces a bare version with npm partial semantics, so
    ``nodejs.org@18`` means any 18.x and ``python.org@3.11.4`` means
    exactly 3.11.4. Other operators are kept as part of the range.
    """
    match = _REQUIREMENT.match(text.strip())
    if not match:
        raise ValueError(f"Invalid package requirement: {text!r}")

    project = match.group("project")
    raw = match.group("constraint")
    if raw is None:
        return PackageRequirement(project=project)
    if raw.startswith("@"):
        raw = raw[1:]
    return PackageRequirement(project=project, constraint=parse_range(raw))

"""Data shapes for requirements, front matter and resolved environments.

A resolution moves through three layers:
    probe    → Signals       (what one marker file contributes)
    walk     → Accumulator   (everything merged so far, traversal order)
    result   → VirtualEnv    (frozen, env values expanded, root decided)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from semantic_version import NpmSpec, Version

# Installation prefix variable; front matter may never set it.
RESERVED_ENV_KEY = "PKGENV_PREFIX"


# ── Requirement layer ───────────────────────────────────────────────


@dataclass(frozen=True)
class PackageRequirement:
    """An ecosystem-qualified project plus a version constraint."""

    project: str  # "nodejs.org", "python.org", …
    constraint: NpmSpec = field(default_factory=lambda: NpmSpec("*"))

    def __str__(self) -> str:
        return f"{self.project}@{self.constraint}"


@dataclass
class FrontMatter:
    """Requirements and env entries declared in a native or embedded document."""

    pkgs: list[PackageRequirement] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


# ── Walk layer ──────────────────────────────────────────────────────


@dataclass
class Signals:
    """What a single matched marker contributes to the walk."""

    pkgs: list[PackageRequirement] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    version: Version | None = None
    teafile: Path | None = None
    srcroot: Path | None = None
    # README-without-tables replaces the hint; VCS dirs only fill it in.
    replace_srcroot: bool = False

    def insert(self, fm: FrontMatter | None) -> Signals:
        if fm is not None:
            self.pkgs.extend(fm.pkgs)
            for key, value in fm.env.items():
                self.env[key] = _prepend(value, self.env.get(key))
        return self


@dataclass
class Accumulator:
    """Everything gathered so far, in strict traversal order."""

    pkgs: list[PackageRequirement] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    version: Version | None = None
    teafiles: list[Path] = field(default_factory=list)
    srcroot: Path | None = None

    @property
    def projects(self) -> set[str]:
        return {pkg.project for pkg in self.pkgs}

    def merge(self, signals: Signals) -> Accumulator:
        """Fold one probe's signals in.

        Requirements append; env values prepend onto existing ones
        (``new:existing``); a version overwrites; the root hint is only
        filled when empty unless the signal says to replace it.
        """
        self.pkgs.extend(signals.pkgs)
        for key, value in signals.env.items():
            if key == RESERVED_ENV_KEY:
                continue
            self.env[key] = _prepend(value, self.env.get(key))
        if signals.version is not None:
            self.version = signals.version
        if signals.teafile is not None:
            self.teafiles.append(signals.teafile)
        if signals.srcroot is not None and (signals.replace_srcroot or self.srcroot is None):
            self.srcroot = signals.srcroot
        return self


def _prepend(value: str, existing: str | None) -> str:
    if existing:
        return f"{value}:{existing}"
    return value


# ── Result layer ────────────────────────────────────────────────────


@dataclass(frozen=True)
class VirtualEnv:
    """Resolved environment for one starting directory. Never mutated."""

    pkgs: tuple[PackageRequirement, ...]
    teafiles: tuple[Path, ...]
    srcroot: Path
    version: Version | None = None
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

"""Repository for pkgenv settings (config.toml + environment overrides)."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import tomlkit

from pkgenv.core import env, paths

DEFAULT_VCS_HINT_DISABLED_ON = ["darwin"]


@dataclass
class Settings:
    """Process-wide inputs to resolution."""

    home: Path
    prefix: Path
    pinned_root: Path | None = None  # PKGENV_DIR
    platform: str = sys.platform
    vcs_root_hint_disabled_on: list[str] = field(
        default_factory=lambda: list(DEFAULT_VCS_HINT_DISABLED_ON)
    )

    def git_root_hint(self, directory: Path) -> bool:
        """Whether a ``.git`` directory may mark the project root here."""
        return self.platform not in self.vcs_root_hint_disabled_on

    @classmethod
    def load(
        cls,
        home: Path | None = None,
        config_file: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Settings:
        """Defaults, overlaid by config.toml, overlaid by ``PKGENV_*`` variables.

        Directories are made absolute with symlinks resolved so they compare
        equal to the directories the resolver walks.
        """
        home = (home or paths.home()).resolve()
        settings = cls(home=home, prefix=paths.default_prefix(home))
        found = env.pkgenv_vars(home, environ)

        path = config_file or paths.config_path(home, found.get("PKGENV_CONFIG", ""))
        if path.is_file():
            apply_toml(settings, path.read_text())

        if "PKGENV_PREFIX" in found:
            settings.prefix = _directory(found["PKGENV_PREFIX"])
        if "PKGENV_DIR" in found:
            settings.pinned_root = _directory(found["PKGENV_DIR"])

        return settings


# ── Serialization ───────────────────────────────────────────────────


def apply_toml(settings: Settings, text: str) -> Settings:
    """Overlay the ``[pkgenv]`` table of *text* onto *settings*."""
    raw = tomlkit.loads(text).get("pkgenv", {})

    if "prefix" in raw:
        settings.prefix = _directory(str(raw["prefix"]))
    if "pinned_root" in raw:
        settings.pinned_root = _directory(str(raw["pinned_root"]))
    if "vcs_root_hint_disabled_on" in raw:
        settings.vcs_root_hint_disabled_on = [
            str(name) for name in raw["vcs_root_hint_disabled_on"]
        ]
    return settings


def dump(settings: Settings) -> str:
    """Serialize effective settings to a TOML string."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("pkgenv configuration"))
    doc.add(tomlkit.nl())

    table = tomlkit.table()
    table.add("prefix", str(settings.prefix))
    if settings.pinned_root is not None:
        table.add("pinned_root", str(settings.pinned_root))
    table.add("vcs_root_hint_disabled_on", settings.vcs_root_hint_disabled_on)
    doc.add("pkgenv", table)

    return tomlkit.dumps(doc)


def save(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump(settings))


def _directory(raw: str) -> Path:
    return Path(raw).expanduser().resolve()

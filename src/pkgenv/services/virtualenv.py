"""Resolve the implicit virtual environment of a working directory.

The resolver walks from the starting directory towards home (or the
filesystem root), running every marker probe in each directory and
merging what they report:

* requirements append in traversal order, closest directory first;
* env values prepend, so an ancestor's value lands in front (``y:x``);
* the version is last-write-wins, so an ancestor's version beats a
  closer one;
* the root is the shallowest of the VCS/README hint and the directory of
  the outermost teafile, unless a pinned root is configured.

Results are cached per starting directory for the life of the
:class:`Resolver`; a failed resolution caches nothing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType

from pkgenv.core import moustaches, paths
from pkgenv.core.errors import VirtualEnvNotFoundError
from pkgenv.core.models import Accumulator, VirtualEnv
from pkgenv.repo.config import Settings
from pkgenv.services.probes import PROBES, Probe, ProbeContext, first_match

logger = logging.getLogger(__name__)


class Resolver:
    """Resolves and memoises :class:`VirtualEnv` records for one run."""

    def __init__(
        self,
        settings: Settings | None = None,
        probes: tuple[Probe, ...] = PROBES,
    ) -> None:
        self.settings = settings or Settings.load()
        self.probes = probes
        self._cache: dict[str, VirtualEnv] = {}

    def resolve(self, start: Path) -> VirtualEnv:
        """Resolve *start*, taken as an absolute path with symlinks resolved."""
        start = Path(start).resolve()
        key = str(start)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("virtual env for %s served from cache", key)
            return cached

        acc = self.walk(start)
        srcroot = self.resolve_srcroot(acc, start)
        venv = VirtualEnv(
            pkgs=tuple(acc.pkgs),
            teafiles=tuple(acc.teafiles),
            srcroot=srcroot,
            version=acc.version,
            env=MappingProxyType(self.expand_env(acc.env, srcroot)),
        )
        self._cache[key] = venv
        return venv

    def clear(self) -> None:
        self._cache.clear()

    # ── ascent ──────────────────────────────────────────────────────

    def walk(self, start: Path) -> Accumulator:
        """Probe every directory of the ascent, closest first."""
        acc = Accumulator()
        for directory in paths.ascent(start, self.settings.home, self.settings.pinned_root):
            acc = self.probe_directory(directory, acc, cwd=start)
        return acc

    def probe_directory(self, directory: Path, acc: Accumulator, *, cwd: Path) -> Accumulator:
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        ctx = ProbeContext(
            dir=directory,
            cwd=cwd,
            home=self.settings.home,
            pinned_root=self.settings.pinned_root,
            git_root_hint=self.settings.git_root_hint,
        )
        for probe in self.probes:
            if probe.when is not None and not probe.when(ctx):
                continue
            marker = first_match(probe, directory)
            if marker is None:
                continue
            try:
                signals = probe.action(marker, acc, ctx)
            except Exception as exc:
                exc.add_note(f"while reading {marker}")
                raise
            if signals.teafile is not None:
                logger.debug("teafile: %s", signals.teafile)
            if signals.srcroot is not None:
                logger.debug("root hint: %s", signals.srcroot)
            acc = acc.merge(signals)
        return acc

    # ── merge results ───────────────────────────────────────────────

    def resolve_srcroot(self, acc: Accumulator, cwd: Path) -> Path:
        """Pick the project root; the shallowest candidate wins."""
        pinned = self.settings.pinned_root
        outer = acc.teafiles[-1].parent if acc.teafiles else None

        srcroot = acc.srcroot
        if pinned is not None:
            srcroot = pinned
        elif srcroot is None or (
            outer is not None and len(outer.parts) < len(srcroot.parts)
        ):
            srcroot = outer

        if srcroot is None:
            raise VirtualEnvNotFoundError(cwd, pinned)
        logger.debug("srcroot for %s: %s", cwd, srcroot)
        return srcroot

    def expand_env(self, env: dict[str, str], srcroot: Path) -> dict[str, str]:
        tokens = {
            **moustaches.host_tokens(),
            "pkgenv.prefix": str(self.settings.prefix),
            "home": str(self.settings.home),
            "srcroot": str(srcroot),
        }
        return {key: moustaches.apply(value, tokens) for key, value in env.items()}

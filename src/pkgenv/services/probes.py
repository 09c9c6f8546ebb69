"""Marker probes — one detector per recognised file or directory.

Each :class:`Probe` names its candidates in priority order. The walker
asks :func:`first_match` for the first candidate present in a directory
and, if there is one, calls the probe's action, which returns the
:class:`Signals` that marker contributes. Actions read the accumulator
(``package.json`` needs to know what was already requested) but never
write to it.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml
from semantic_version import NpmSpec

from pkgenv.core import frontmatter, paths, versions
from pkgenv.core.errors import VirtualEnvParseError
from pkgenv.core.models import Accumulator, PackageRequirement, Signals
from pkgenv.services import readme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeContext:
    """Per-directory facts a probe may consult."""

    dir: Path
    cwd: Path
    home: Path
    pinned_root: Path | None = None
    git_root_hint: Callable[[Path], bool] = lambda _dir: True

    @property
    def at_home(self) -> bool:
        return self.dir == self.home

    def parse_error(self, teafile: Path) -> VirtualEnvParseError:
        return VirtualEnvParseError(teafile, cwd=self.cwd, pinned_root=self.pinned_root)


Action = Callable[[Path, Accumulator, ProbeContext], Signals]


@dataclass(frozen=True)
class Probe:
    names: tuple[str, ...]
    action: Action
    kind: Literal["file", "dir", "markdown"] = "file"
    when: Callable[[ProbeContext], bool] | None = None


def first_match(probe: Probe, directory: Path) -> Path | None:
    """First candidate of *probe* present in *directory*."""
    for name in probe.names:
        if probe.kind == "markdown":
            for ext in paths.MARKDOWN_EXTENSIONS:
                candidate = directory / f"{name}.{ext}"
                if candidate.is_file():
                    return candidate
        elif probe.kind == "dir":
            candidate = directory / name
            if candidate.is_dir():
                return candidate
        else:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def any_version() -> NpmSpec:
    return NpmSpec("*")


def _requires(project: str, path: Path) -> Signals:
    return Signals(pkgs=[PackageRequirement(project, any_version())], teafile=path)


# ── actions ─────────────────────────────────────────────────────────


def deno(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    signals = _requires("deno.land", path)
    data = json.loads(strip_jsonc(path.read_text()))
    tea = data.get("tea") if isinstance(data, dict) else None
    if isinstance(tea, dict):
        signals.insert(frontmatter.refine(tea))
    return signals


def node_version(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    # https://github.com/shadowspawn/node-version-usage
    s = path.read_text().strip()
    if s.startswith("v"):
        s = s[1:]
    return _pinned(f"nodejs.org@{s}", path, ctx)


def ruby_version(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    # TODO: map rbenv flavours such as jruby-9.4.2.0 onto their own projects
    return _pinned(f"ruby-lang.org@{path.read_text().strip()}", path, ctx)


def _pinned(token: str, path: Path, ctx: ProbeContext) -> Signals:
    try:
        pkg = versions.parse_requirement(token)
    except ValueError as exc:
        raise ctx.parse_error(path) from exc
    return Signals(pkgs=[pkg], teafile=path)


def python_version(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    """First parseable line wins; pyenv files hold plenty that is not a version."""
    signals = Signals(teafile=path)
    for line in path.read_text().strip().split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            signals.pkgs.append(versions.parse_requirement(f"python.org@{line}"))
        except ValueError:
            continue
        break
    return signals


def package_json(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    signals = Signals(teafile=path)
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        data = {}

    tea = data.get("tea")
    if isinstance(tea, dict):
        signals.insert(frontmatter.refine(tea))

    requested = acc.projects | {pkg.project for pkg in signals.pkgs}
    if "bun.sh" not in requested:
        signals.pkgs.append(PackageRequirement("nodejs.org", any_version()))

    signals.version = versions.parse(data.get("version"))
    return signals


def github_action(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    signals = Signals(teafile=path)
    data = yaml.safe_load(path.read_text())
    runs = data.get("runs") if isinstance(data, dict) else None
    using = runs.get("using") if isinstance(runs, dict) else None
    match = re.search(r"node(\d+)", using) if isinstance(using, str) else None
    if match:
        signals.pkgs.append(PackageRequirement("nodejs.org", NpmSpec(f"^{match.group(1)}")))
    else:
        logger.debug("%s does not run on node; skipping", path)
    return signals


def _manifest(project: str) -> Action:
    def action(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
        return _requires(project, path).insert(frontmatter.read_embedded(path))

    action.__name__ = f"manifest[{project}]"
    return action


def pyproject(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    # Only the build backend is sniffed; the TOML itself is not interpreted.
    if "poetry.core.masonry.api" in path.read_text():
        project = "python-poetry.org"
    else:
        project = "python.org"
    return _requires(project, path).insert(frontmatter.read_embedded(path))


def readme_tables(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    info = readme.read(path)
    signals = Signals(pkgs=list(info.pkgs), version=info.version)
    if info.version is not None or info.pkgs:
        signals.teafile = path
    else:
        signals.srcroot = path.parent
        signals.replace_srcroot = True
    return signals


def yarn_classic(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    return _requires("classic.yarnpkg.com", path)


def yarn_berry(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    return _requires("yarnpkg.com", path)


def native_frontmatter(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    return Signals(teafile=path).insert(frontmatter.read_native(path))


def version_file(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    return Signals(teafile=path, version=versions.parse(path.read_text()))


def vcs_root(path: Path, acc: Accumulator, ctx: ProbeContext) -> Signals:
    return Signals(srcroot=path.parent)


def strip_jsonc(content: str) -> str:
    """Drop ``//`` and ``/* */`` comments and trailing commas, leaving strings alone."""
    pattern = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
    content = pattern.sub(lambda m: m.group(1) or "", content)
    return re.sub(r',(\s*[}\]])', r"\1", content)


# ── table ───────────────────────────────────────────────────────────


PROBES: tuple[Probe, ...] = (
    Probe(("deno.json", "deno.jsonc"), deno),
    Probe((".node-version",), node_version),
    Probe((".ruby-version",), ruby_version),
    Probe((".python-version",), python_version),
    Probe(("package.json",), package_json),
    Probe(("action.yml", "action.yaml"), github_action),
    Probe(("Cargo.toml", "cargo.toml"), _manifest("rust-lang.org")),
    Probe(("go.mod", "go.sum"), _manifest("go.dev")),
    Probe(
        (
            "requirements.txt",
            "Pipfile",
            "pipfile",
            "Pipfile.lock",
            "pipfile.lock",
            "setup.py",
        ),
        _manifest("python.org"),
    ),
    Probe(("pyproject.toml",), pyproject),
    Probe(("Gemfile",), _manifest("ruby-lang.org")),
    Probe(("README",), readme_tables, kind="markdown"),
    Probe((".yarnrc",), yarn_classic, when=lambda ctx: not ctx.at_home),
    Probe((".yarnrc.yml",), yarn_berry),
    Probe(("tea.yml", "tea.yaml", "pkgenv.yml", "pkgenv.yaml"), native_frontmatter),
    Probe(("VERSION",), version_file),
    Probe(
        (".git",),
        vcs_root,
        kind="dir",
        when=lambda ctx: not ctx.at_home and ctx.git_root_hint(ctx.dir),
    ),
    Probe((".hg", ".svn"), vcs_root, kind="dir", when=lambda ctx: not ctx.at_home),
)

"""Resolution errors."""

from __future__ import annotations

from pathlib import Path


class VirtualEnvError(Exception):
    """Base for resolution failures; carries the directory context."""

    def __init__(self, msg: str, *, cwd: Path, pinned_root: Path | None = None) -> None:
        super().__init__(msg)
        self.cwd = cwd
        self.pinned_root = pinned_root


class VirtualEnvNotFoundError(VirtualEnvError):
    def __init__(self, cwd: Path, pinned_root: Path | None = None) -> None:
        super().__init__(
            f"not-found: no project root above {cwd}", cwd=cwd, pinned_root=pinned_root
        )


class VirtualEnvParseError(VirtualEnvError):
    """A version-pin marker holds something that is not a requirement."""

    def __init__(self, teafile: Path, *, cwd: Path, pinned_root: Path | None = None) -> None:
        super().__init__(f"parse error: {teafile}", cwd=cwd, pinned_root=pinned_root)
        self.teafile = teafile

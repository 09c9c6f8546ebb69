"""``{{ token }}`` substitution for environment values."""

from __future__ import annotations

import os
import platform
import re
import sys


def host_tokens() -> dict[str, str]:
    """Tokens describing the machine we are running on."""
    plat = {"darwin": "darwin", "win32": "windows"}.get(sys.platform, "linux")
    machine = platform.machine().lower()
    arch = "aarch64" if machine in {"arm64", "aarch64"} else "x86-64"
    return {
        "hw.platform": plat,
        "hw.arch": arch,
        "hw.target": f"{arch}-{plat}",
        "hw.concurrency": str(os.cpu_count() or 1),
    }


def apply(text: str, tokens: dict[str, str]) -> str:
    """Replace every known ``{{ name }}`` in *text*; unknown tokens stay."""
    if not text:
        return ""

    def _sub(match: re.Match[str]) -> str:
        return tokens.get(match.group(1), match.group(0))

    return re.sub(r"\{\{\s*([\w.-]+)\s*\}\}", _sub, text)

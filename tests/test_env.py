import os
from pathlib import Path

from pkgenv.core.env import parse_env_lines, pkgenv_vars, user_env_files


def test_parse_env_lines():
    text = "# comment\nexport A=1\nB = 'two words'\nnot-a-pair\n=skip\nC=\"x\"\n"

    assert parse_env_lines(text) == [("A", "1"), ("B", "two words"), ("C", "x")]


def test_env_file_order(home):
    files = user_env_files(home, {"PKGENV_ENV_FILE": "/etc/pk.env", "PKGENV_HOME": "/opt/pk"})

    assert files == [
        Path("/etc/pk.env"),
        Path("/opt/pk/.env"),
        home / ".config" / "pkgenv" / "env",
        home / ".config" / "pkgenv" / ".env",
    ]


def test_pkgenv_vars_from_files_and_environment(home, make):
    make(".config/pkgenv/env", "PKGENV_DIR=/from/env\nPKGENV_PREFIX=/from/env-prefix\nOTHER=1\n")
    make(".config/pkgenv/.env", "PKGENV_DIR=/from/dotenv\nPKGENV_CONFIG=/c.toml\n")

    found = pkgenv_vars(home, {"PKGENV_PREFIX": "/from/process", "PATH": "/bin"})

    assert found == {
        "PKGENV_DIR": "/from/env",
        "PKGENV_PREFIX": "/from/process",
        "PKGENV_CONFIG": "/c.toml",
    }


def test_pkgenv_vars_never_touch_os_environ(home, make, monkeypatch):
    monkeypatch.delenv("PKGENV_SENTINEL", raising=False)
    make(".config/pkgenv/env", "PKGENV_SENTINEL=1\n")

    assert pkgenv_vars(home)["PKGENV_SENTINEL"] == "1"
    assert "PKGENV_SENTINEL" not in os.environ


def test_blank_values_are_ignored(home):
    assert pkgenv_vars(home, {"PKGENV_DIR": "  "}) == {}

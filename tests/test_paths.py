from pathlib import Path

from pkgenv.core import paths


def test_ascent_from_home_is_home_only(home):
    assert paths.ascent(home, home) == [home]


def test_ascent_stops_below_home(home):
    start = home / "a" / "b"

    assert paths.ascent(start, home) == [start, home / "a"]


def test_ascent_stops_at_pinned_dir(home):
    start = home / "a" / "b" / "c"

    assert paths.ascent(start, home, stop_at=home / "a" / "b") == [start, home / "a" / "b"]


def test_ascent_outside_home_never_includes_fs_root(home):
    start = home.parent / "elsewhere" / "x"

    dirs = paths.ascent(start, home)

    assert dirs[:2] == [start, start.parent]
    assert not any(paths.is_fs_root(d) for d in dirs)
    assert home not in dirs


def test_config_path_override(monkeypatch, tmp_path):
    monkeypatch.setenv("PKGENV_CONFIG", str(tmp_path / "alt.toml"))

    assert paths.config_path(Path("/home/u")) == tmp_path / "alt.toml"


def test_config_path_default(home):
    assert paths.config_path(home) == home / ".config" / "pkgenv" / "config.toml"


def test_ascent_includes_pinned_home(home):
    start = home / "a"

    assert paths.ascent(start, home, stop_at=home) == [start, home]

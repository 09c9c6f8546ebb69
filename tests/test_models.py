from pathlib import Path

from semantic_version import Version

from pkgenv.core.models import Accumulator, FrontMatter, PackageRequirement, Signals, VirtualEnv
from pkgenv import templates


def test_merge_prepends_env_and_skips_reserved_key():
    acc = Accumulator(env={"PATH": "x"})
    acc.merge(Signals(env={"PATH": "y", "PKGENV_PREFIX": "/p"}))

    assert acc.env == {"PATH": "y:x"}


def test_merge_empty_existing_value_is_replaced():
    acc = Accumulator(env={"A": ""})
    acc.merge(Signals(env={"A": "v"}))

    assert acc.env["A"] == "v"


def test_merge_root_hint_fill_and_replace():
    acc = Accumulator()
    acc.merge(Signals(srcroot=Path("/a/b")))
    acc.merge(Signals(srcroot=Path("/a")))
    assert acc.srcroot == Path("/a/b")

    acc.merge(Signals(srcroot=Path("/c"), replace_srcroot=True))
    assert acc.srcroot == Path("/c")


def test_merge_version_last_write_wins():
    acc = Accumulator()
    acc.merge(Signals(version=Version("1.0.0")))
    acc.merge(Signals())
    acc.merge(Signals(version=Version("2.0.0")))

    assert acc.version == Version("2.0.0")


def test_signals_insert_front_matter():
    fm = FrontMatter(pkgs=[PackageRequirement("zlib.net")], env={"A": "1"})
    signals = Signals(pkgs=[PackageRequirement("go.dev")]).insert(fm).insert(None)

    assert [p.project for p in signals.pkgs] == ["go.dev", "zlib.net"]
    assert signals.env == {"A": "1"}


def test_as_dict_keeps_order():
    venv = VirtualEnv(
        pkgs=(PackageRequirement("b.org"), PackageRequirement("a.org")),
        teafiles=(Path("/w/p/VERSION"),),
        srcroot=Path("/w/p"),
        version=Version("1.2.3"),
        env={"K": "v"},
    )

    assert templates.as_dict(venv) == {
        "srcroot": "/w/p",
        "version": "1.2.3",
        "pkgs": ["b.org@*", "a.org@*"],
        "teafiles": ["/w/p/VERSION"],
        "env": {"K": "v"},
    }

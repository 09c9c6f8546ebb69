from pkgenv.core import moustaches


def test_apply_known_tokens():
    tokens = {"srcroot": "/w/proj", "home": "/home/u"}

    assert moustaches.apply("{{srcroot}}/bin:{{ home }}/bin", tokens) == "/w/proj/bin:/home/u/bin"


def test_unknown_tokens_are_left_alone():
    assert moustaches.apply("{{nope}}/x", {"home": "/h"}) == "{{nope}}/x"


def test_empty_input():
    assert moustaches.apply("", {"home": "/h"}) == ""


def test_host_tokens_are_consistent():
    tokens = moustaches.host_tokens()

    assert tokens["hw.platform"] in {"linux", "darwin", "windows"}
    assert tokens["hw.arch"] in {"x86-64", "aarch64"}
    assert tokens["hw.target"] == f"{tokens['hw.arch']}-{tokens['hw.platform']}"
    assert int(tokens["hw.concurrency"]) >= 1

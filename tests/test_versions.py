import pytest
from semantic_version import Version

from pkgenv.core import versions


@pytest.mark.parametrize(
    "text, expected",
    [("1.2.3", "1.2.3"), ("v1.2.3\n", "1.2.3"), ("1.2", "1.2.0"), ("7", "7.0.0"), ("1.0.0-rc.1", "1.0.0-rc.1")],
)
def test_coerce(text, expected):
    assert versions.coerce(text) == Version(expected)


@pytest.mark.parametrize("text", ["", "banana", "1.2.3.4", "1.x"])
def test_coerce_rejects(text):
    with pytest.raises(ValueError):
        versions.coerce(text)


def test_parse_is_lenient():
    assert versions.parse(None) is None
    assert versions.parse(3) is None
    assert versions.parse("nope") is None


def test_requirement_at_version_is_npm_partial():
    req = versions.parse_requirement("nodejs.org@18")

    assert req.project == "nodejs.org"
    assert req.constraint.match(Version("18.9.1"))
    assert not req.constraint.match(Version("19.0.0"))


def test_requirement_exact_version():
    req = versions.parse_requirement("python.org@3.11.4")

    assert str(req) == "python.org@3.11.4"
    assert not req.constraint.match(Version("3.11.5"))


def test_requirement_operators_and_bare():
    assert str(versions.parse_requirement("nodejs.org^18")) == "nodejs.org@^18"
    assert str(versions.parse_requirement("deno.land")) == "deno.land@*"


@pytest.mark.parametrize("text", ["python.org@system", "nodejs.org@", "", "two words"])
def test_requirement_rejects(text):
    with pytest.raises(ValueError):
        versions.parse_requirement(text)

import pytest
from pathlib import Path
from click.testing import CliRunner
from pkgenv.repo.config import Settings
from pkgenv.services.virtualenv import Resolver

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's pkgenv variables out of the tests."""
    for name in ("PKGENV_DIR", "PKGENV_PREFIX", "PKGENV_CONFIG", "PKGENV_ENV_FILE", "PKGENV_HOME"):
        monkeypatch.delenv(name, raising=False)

@pytest.fixture
def runner():
    """Click CLI runner fixture."""
    return CliRunner()

@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory; walks from inside it stop here."""
    home_dir = tmp_path.resolve() / "home"
    home_dir.mkdir()
    return home_dir

@pytest.fixture
def settings(home) -> Settings:
    return Settings(home=home, prefix=home / ".pkgenv", platform="linux")

@pytest.fixture
def resolver(settings) -> Resolver:
    return Resolver(settings)

@pytest.fixture
def make(home):
    """Create a file (or, with a trailing slash, a directory) below home."""
    def _make(rel: str, content: str = "") -> Path:
        path = home / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            return path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _make

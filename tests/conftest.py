import pytest
from pathlib import Path

from dotenv import load_dotenv

from helpers import mark_by_dir

load_dotenv()


TESTS = Path(__file__).parent
PKG = TESTS / "snyk_issues_mcp"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep real credentials and the user state dir out of every test
    for name in ("SNYK_API_KEY", "SNYK_ORG_ID", "SNYK_ORG_SLUG", "SNYK_API_URL", "SNYK_WEB_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SNYK_MCP_DIRECTORIES__HOME", str(tmp_path / "home"))
    yield


def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, PKG / "core", pytest.mark.unit)
    mark_by_dir(items, PKG / "infra", pytest.mark.integration)
    mark_by_dir(items, PKG / "app", pytest.mark.e2e)
    mark_by_dir(items, PKG / "shared", pytest.mark.unit)

"""Shared fixtures for app-level tests."""
import pytest
from dependency_injector import providers

from snyk_issues_mcp.app.config import AppConfig, DirectoryConfig, LoggingConfig, SnykConfig
from snyk_issues_mcp.app.container import Container

from fakes import ISSUE_ID, ORG_ID, ORG_SLUG, P1, P2, FakeMCPServer, FakeSnykApi, raw_issue, raw_project


@pytest.fixture
def fake_api():
    return FakeSnykApi(
        projects=[
            raw_project(P1, "github.com/acme/app:package.json"),
            raw_project(P2, "github.com/acme/app:Dockerfile"),
        ],
        issues={
            None: [raw_issue("i1", P1, title="Prototype Pollution"), raw_issue("i2", P2, title="Outdated base image")],
            P1: [raw_issue("i1", P1, title="Prototype Pollution")],
            P2: [raw_issue("i2", P2, title="Outdated base image")],
        },
        issue_details={ISSUE_ID: raw_issue(ISSUE_ID, P1, fixed_in=["4.17.19"])},
    )


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        snyk=SnykConfig(api_key="test-token", org_id=ORG_ID, org_slug=ORG_SLUG),
        logging=LoggingConfig(level="DEBUG"),
    )


def _mocked_container(fake_api) -> Container:
    container = Container()
    container.snyk_api.override(providers.Object(fake_api))
    container.mcp_server.override(providers.Factory(FakeMCPServer))
    return container


@pytest.fixture
def snyk_env(monkeypatch):
    """Organization settings as the CLI reads them from the environment."""
    monkeypatch.setenv("SNYK_API_KEY", "test-token")
    monkeypatch.setenv("SNYK_ORG_ID", ORG_ID)
    monkeypatch.setenv("SNYK_ORG_SLUG", ORG_SLUG)


@pytest.fixture
def mock_container_for_cli(fake_api, monkeypatch):
    """Patch the CLI's Container class to return a container with a fake API."""
    FakeMCPServer.runs = []
    monkeypatch.setattr("snyk_issues_mcp.app.cli.Container", lambda: _mocked_container(fake_api))
    return fake_api


@pytest.fixture
def mock_container_for_main(fake_api, monkeypatch):
    """Patch the facade's Container class to return a container with a fake API."""
    monkeypatch.setattr("snyk_issues_mcp.app.main.Container", lambda: _mocked_container(fake_api))
    return fake_api

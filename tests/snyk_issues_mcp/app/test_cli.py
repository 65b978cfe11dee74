import json

import pytest
from typer.testing import CliRunner

from snyk_issues_mcp.app.cli import app

from fakes import ISSUE_ID, P1, P2, FakeMCPServer


runner = CliRunner()


def test_issues_json(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["issues", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total"] == payload["count"] == 2
    assert payload["has_more"] is False


def test_issues_human_readable(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["issues"])

    assert result.exit_code == 0
    assert "Found 2 issues:" in result.stdout
    assert "[HIGH] Prototype Pollution" in result.stdout
    assert "Repository: github.com/acme/app:package.json" in result.stdout
    with pytest.raises(json.JSONDecodeError):
        json.loads(result.stdout)


def test_issues_for_project_id(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["issues", P2, "--severity", "high", "--json"])

    assert result.exit_code == 0
    assert [i["id"] for i in json.loads(result.stdout)["issues"]] == ["i2"]
    call = mock_container_for_cli.list_issues_calls[-1]
    assert call["scan_item_id"] == P2
    assert call["severity"] == ["high"]


def test_repo_issues(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["repo-issues", "acme/app"])

    assert result.exit_code == 0
    assert "Matching projects: 2" in result.stdout
    assert f"github.com/acme/app:Dockerfile ({P2})" in result.stdout
    assert "Found 2 issues:" in result.stdout


def test_repo_issues_no_match(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["repo-issues", "nothing-like-this", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["matching_projects"] == 0
    assert mock_container_for_cli.list_issues_calls == []


def test_issue_detail(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["issue", ISSUE_ID])

    assert result.exit_code == 0
    assert f"ID:      {ISSUE_ID}" in result.stdout
    assert "lodash: 4.17.15 -> 4.17.19" in result.stdout


def test_issue_key_is_rejected(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["issue", "SNYK-JS-LODASH-567746"])

    assert result.exit_code == 1
    assert "must be a UUID" in result.output


def test_projects(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["projects", "package"])

    assert result.exit_code == 0
    assert "Found 1 projects matching 'package':" in result.stdout
    assert P1 in result.stdout


def test_missing_org_slug_exits_2(monkeypatch, snyk_env, mock_container_for_cli):
    monkeypatch.delenv("SNYK_ORG_SLUG")

    result = runner.invoke(app, ["issues"])

    assert result.exit_code == 2
    assert "SNYK_ORG_SLUG must be set" in result.output
    assert mock_container_for_cli.list_issues_calls == []


def test_projects_without_slug(monkeypatch, snyk_env, mock_container_for_cli):
    monkeypatch.delenv("SNYK_ORG_SLUG")

    result = runner.invoke(app, ["projects", "acme", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["total"] == 2


def test_invalid_status_exits_1(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["issues", "--status", "closed"])

    assert result.exit_code == 1
    assert "Invalid status: closed" in result.output


def test_serve_stdio(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["serve"])

    assert result.exit_code == 0
    assert FakeMCPServer.runs == [("stdio", None)]


def test_serve_http_requires_port(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["serve", "--mode", "streamable-http"])

    assert result.exit_code == 1
    assert "--port is required" in result.output
    assert FakeMCPServer.runs == []


def test_serve_http_with_port(snyk_env, mock_container_for_cli):
    result = runner.invoke(app, ["serve", "--mode", "streamable-http", "--port", "18080"])

    assert result.exit_code == 0
    assert FakeMCPServer.runs == [("streamable-http", 18080)]

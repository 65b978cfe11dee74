"""MCP tool tests through the in-memory fastmcp client."""
import asyncio
import json
import logging

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from snyk_issues_mcp.core.services import (
    IssueFetcher,
    IssueFormatter,
    ProjectResolver,
    RepositoryIssueAggregator,
)
from snyk_issues_mcp.core.usecases.find_projects import FindProjectsUseCase
from snyk_issues_mcp.core.usecases.get_issue import GetIssueUseCase
from snyk_issues_mcp.core.usecases.get_issues import GetIssuesUseCase
from snyk_issues_mcp.core.usecases.get_repo_issues import GetRepoIssuesUseCase
from snyk_issues_mcp.infra.mcp_server import MCPServer

from fakes import ISSUE_ID, ORG_ID, ORG_SLUG, P1, P2, FakeLogger, FakeSnykApi, raw_issue, raw_project


def _server(api, *, org_id=ORG_ID, org_slug=ORG_SLUG, logger=None) -> MCPServer:
    logger = logger or FakeLogger()
    resolver = ProjectResolver(snyk_api=api)
    fetcher = IssueFetcher(snyk_api=api, logger=logger)
    formatter = IssueFormatter()
    return MCPServer(
        get_issues_uc=GetIssuesUseCase(
            snyk_api=api, resolver=resolver, fetcher=fetcher, formatter=formatter, logger=logger
        ),
        get_repo_issues_uc=GetRepoIssuesUseCase(
            aggregator=RepositoryIssueAggregator(
                resolver=resolver, fetcher=fetcher, formatter=formatter, logger=logger
            )
        ),
        get_issue_uc=GetIssueUseCase(snyk_api=api, formatter=formatter),
        find_projects_uc=FindProjectsUseCase(resolver=resolver),
        org_id=org_id,
        org_slug=org_slug,
        logger=logger,
    )


def _call(server: MCPServer, tool: str, args: dict) -> dict:
    async def go():
        async with Client(server.build()) as client:
            result = await client.call_tool(tool, args)
            return json.loads(result.content[0].text)

    return asyncio.run(go())


@pytest.fixture
def api():
    return FakeSnykApi(
        projects=[raw_project(P1, "github.com/acme/app:package.json"), raw_project(P2, "github.com/acme/other")],
        issues={
            None: [raw_issue("i1", P1), raw_issue("i2", P2)],
            P1: [raw_issue("i1", P1)],
            P2: [raw_issue("i2", P2)],
        },
        issue_details={ISSUE_ID: raw_issue(ISSUE_ID, P1)},
    )


def test_lists_four_tools(api):
    async def go():
        async with Client(_server(api).build()) as client:
            return await client.list_tools()

    tools = asyncio.run(go())
    assert sorted(t.name for t in tools) == ["find_projects", "get_issue", "get_issues", "get_repo_issues"]


def test_get_issues_tool(api):
    payload = _call(_server(api), "get_issues", {})

    assert payload["total"] == payload["count"] == 2
    assert payload["has_more"] is False
    assert payload["issues"][0]["repository"] == "github.com/acme/app:package.json"


def test_get_issues_project_id_alias(api):
    payload = _call(_server(api), "get_issues", {"projectId": P2, "status": "open"})

    assert [i["id"] for i in payload["issues"]] == ["i2"]
    assert api.list_issues_calls[-1]["scan_item_id"] == P2


def test_get_repo_issues_tool(api):
    payload = _call(_server(api), "get_repo_issues", {"repositoryName": "acme/app"})

    assert payload["repositoryName"] == "acme/app"
    assert payload["matching_projects"] == 1
    assert [i["id"] for i in payload["issues"]] == ["i1"]


def test_get_issue_tool(api):
    payload = _call(_server(api), "get_issue", {"issue_id": ISSUE_ID})

    assert payload["id"] == ISSUE_ID
    assert "remedies" in payload and "upgrades" in payload


def test_find_projects_needs_only_org_id(api):
    payload = _call(_server(api, org_slug=None), "find_projects", {"query": "ACME"})

    assert payload["total"] == 2


def test_missing_slug_fails_tool_call(api):
    logger = FakeLogger()
    with pytest.raises(ToolError, match="SNYK_ORG_SLUG"):
        _call(_server(api, org_slug=None, logger=logger), "get_issues", {})

    assert api.list_issues_calls == []
    assert "tool_failed" in logger.messages("error")


def test_issue_key_is_rejected(api):
    with pytest.raises(ToolError, match="must be a UUID"):
        _call(_server(api), "get_issue", {"issue_id": "SNYK-JS-LODASH-567746"})


def test_upstream_error_is_tool_error():
    api = FakeSnykApi(fail_listing=True)
    with pytest.raises(ToolError, match="Snyk API error: 404"):
        _call(_server(api), "find_projects", {"query": "x"})


def test_run_validates_transport(api):
    server = _server(api)
    with pytest.raises(ValueError, match="Invalid transport"):
        server.run(transport="sse")
    with pytest.raises(ValueError, match="Port is required"):
        server.run(transport="streamable-http")


def test_tool_done_logged_under_module_logger(api, caplog):
    with caplog.at_level(logging.DEBUG, logger="snyk_issues_mcp.infra.mcp_server"):
        _call(_server(api), "find_projects", {"query": "acme"})

    done = [r for r in caplog.records if r.getMessage() == "tool_done"]
    assert [r.name for r in done] == ["snyk_issues_mcp.infra.mcp_server"]
    assert done[0].tool == "find_projects"

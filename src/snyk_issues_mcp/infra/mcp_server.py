from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Awaitable, Callable, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware.logging import LoggingMiddleware
from pydantic import Field

from ..core.domain.exceptions import ConfigurationError, IssueNotFoundError, SnykApiError
from ..core.domain.models import OrgContext
from ..core.ports import LoggerPort
from ..core.usecases.find_projects import FindProjectsUseCase
from ..core.usecases.get_issue import GetIssueUseCase
from ..core.usecases.get_issues import GetIssuesUseCase
from ..core.usecases.get_repo_issues import GetRepoIssuesUseCase
from .mcp.wiretap_logging import WiretapLoggingMiddleware

logger = logging.getLogger(__name__)

SERVER_NAME = "snyk-mcp-server"

StatusArg = Annotated[
    Literal["open", "resolved", "ignored"],
    Field(description="Issue Status Filter"),
]
SeverityArg = Annotated[
    Optional[Literal["low", "medium", "high", "critical"]],
    Field(description="Issue Severity Filter (optional)"),
]

# Errors that are reported to the MCP client as tool failures
_TOOL_ERRORS = (ConfigurationError, SnykApiError, IssueNotFoundError, ValueError)


class MCPServer:
    """FastMCP binding for the four issue tools.

    Organization settings are passed in once and turned into an OrgContext
    on every tool call, so missing values fail that call before any request.
    """

    def __init__(
        self,
        *,
        get_issues_uc: GetIssuesUseCase,
        get_repo_issues_uc: GetRepoIssuesUseCase,
        get_issue_uc: GetIssueUseCase,
        find_projects_uc: FindProjectsUseCase,
        org_id: str | None,
        org_slug: str | None,
        logger: LoggerPort,
    ) -> None:
        self._get_issues_uc = get_issues_uc
        self._get_repo_issues_uc = get_repo_issues_uc
        self._get_issue_uc = get_issue_uc
        self._find_projects_uc = find_projects_uc
        self._org_id = org_id
        self._org_slug = org_slug
        self._logger = logger

    def build(self) -> FastMCP:
        app = FastMCP(
            name=SERVER_NAME,
            instructions="Query Snyk issues and projects of one organization.",
        )
        app.add_middleware(LoggingMiddleware(include_payloads=True))
        app.add_middleware(WiretapLoggingMiddleware())

        @app.tool(
            name="get_issues",
            description=(
                "Retrieve Snyk issues for an organization. Optionally filter by project: "
                "'repo' accepts a project UUID or an exact project name."
            ),
        )
        async def get_issues(
            repo: Annotated[
                Optional[str],
                Field(description='Project UUID (e.g. "12345678-1234-1234-1234-123456789012") or exact project name.'),
            ] = None,
            projectId: Annotated[
                Optional[str],
                Field(description="Alias of 'repo' kept for older clients."),
            ] = None,
            status: StatusArg = "open",
            severity: SeverityArg = None,
        ) -> str:
            return await self._call(
                "get_issues",
                lambda org: self._get_issues_uc.execute(
                    org=org,
                    repo=repo or projectId,
                    status=status,
                    severity=severity,
                ),
            )

        @app.tool(
            name="get_repo_issues",
            description=(
                "Retrieve all Snyk issues for projects matching a repository name. Matches project "
                "names by case-insensitive substring and aggregates issues from all matching projects."
            ),
        )
        async def get_repo_issues(
            repositoryName: Annotated[
                str,
                Field(description='Repository name or part of it (e.g. "acme/app" or "myRepo").'),
            ],
            status: StatusArg = "open",
            severity: SeverityArg = None,
        ) -> str:
            return await self._call(
                "get_repo_issues",
                lambda org: self._get_repo_issues_uc.execute(
                    org=org,
                    repository_name=repositoryName,
                    status=status,
                    severity=severity,
                ),
            )

        @app.tool(
            name="get_issue",
            description=(
                "Retrieve detailed information about a specific Snyk issue by its UUID "
                '(e.g. "4a18d42f-0706-4ad0-b127-24078731fbed"), NOT the issue key (e.g. "SNYK-JAVA-...").'
            ),
        )
        async def get_issue(
            issue_id: Annotated[
                str,
                Field(description="The unique identifier (UUID) of the issue to retrieve."),
            ],
        ) -> str:
            return await self._call(
                "get_issue",
                lambda org: self._get_issue_uc.execute(org=org, issue_id=issue_id),
            )

        @app.tool(
            name="find_projects",
            description=(
                "Search for Snyk projects by name. Returns projects whose name contains "
                "the query (case-insensitive substring match)."
            ),
        )
        async def find_projects(
            query: Annotated[
                str,
                Field(description="Substring to match against project names (repository, file name, ...)."),
            ],
        ) -> str:
            return await self._call(
                "find_projects",
                lambda org: self._find_projects_uc.execute(org=org, query=query),
                require_slug=False,
            )

        return app

    def run(self, *, transport: str = "stdio", port: int | None = None) -> None:
        """Build the app and serve it (blocking)."""
        if transport not in ("stdio", "streamable-http"):
            raise ValueError(f"Invalid transport mode: {transport}. Must be 'stdio' or 'streamable-http'.")
        if transport == "streamable-http" and port is None:
            raise ValueError("Port is required for streamable-http transport mode.")

        app = self.build()
        self._logger.info("mcp_server_starting", type="mcp_server_starting", transport=transport, port=port)
        if transport == "stdio":
            app.run(transport="stdio")
        else:
            app.run(transport="streamable-http", port=port)

    async def _call(
        self,
        tool: str,
        run: Callable[[OrgContext], Awaitable[dict[str, Any]]],
        *,
        require_slug: bool = True,
    ) -> str:
        try:
            org = OrgContext.resolve(self._org_id, self._org_slug, require_slug=require_slug)
            result = await run(org)
        except _TOOL_ERRORS as e:
            self._logger.error("tool_failed", type="tool_failed", tool=tool, error=str(e))
            raise ToolError(str(e)) from e
        logger.debug("tool_done", extra={"tool": tool})
        return json.dumps(result, indent=2, ensure_ascii=False)

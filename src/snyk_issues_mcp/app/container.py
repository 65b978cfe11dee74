from __future__ import annotations

from dependency_injector import containers, providers

from .config import AppConfig
from ..core.services import (
    IssueFetcher,
    IssueFormatter,
    ProjectResolver,
    RepositoryIssueAggregator,
)
from ..core.usecases.find_projects import FindProjectsUseCase
from ..core.usecases.get_issue import GetIssueUseCase
from ..core.usecases.get_issues import GetIssuesUseCase
from ..core.usecases.get_repo_issues import GetRepoIssuesUseCase
from ..infra.logging import ToolLogger
from ..infra.mcp_server import MCPServer
from ..infra.snyk_client import SnykRestClient


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    config = providers.Configuration(pydantic_settings=[AppConfig()])

    # Upstream API adapter
    snyk_api = providers.Singleton(
        SnykRestClient,
        api_key=config.snyk.api_key,
        base_url=config.snyk.api_url,
        version=config.snyk.api_version,
        timeout=config.snyk.timeout,
    )

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        ToolLogger,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        file_output=config.logging.file_output,
        console_output=config.logging.console_output,
        level=config.logging.level,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
    )

    # Domain services
    resolver = providers.Factory(ProjectResolver, snyk_api=snyk_api)

    fetcher = providers.Factory(IssueFetcher, snyk_api=snyk_api, logger=logger)

    formatter = providers.Singleton(IssueFormatter, web_url=config.snyk.web_url)

    aggregator = providers.Factory(
        RepositoryIssueAggregator,
        resolver=resolver,
        fetcher=fetcher,
        formatter=formatter,
        logger=logger,
    )

    # Use cases
    get_issues_uc = providers.Factory(
        GetIssuesUseCase,
        snyk_api=snyk_api,
        resolver=resolver,
        fetcher=fetcher,
        formatter=formatter,
        logger=logger,
    )

    get_repo_issues_uc = providers.Factory(
        GetRepoIssuesUseCase,
        aggregator=aggregator,
    )

    get_issue_uc = providers.Factory(
        GetIssueUseCase,
        snyk_api=snyk_api,
        formatter=formatter,
    )

    find_projects_uc = providers.Factory(
        FindProjectsUseCase,
        resolver=resolver,
    )

    # MCP tool server
    mcp_server = providers.Factory(
        MCPServer,
        get_issues_uc=get_issues_uc,
        get_repo_issues_uc=get_repo_issues_uc,
        get_issue_uc=get_issue_uc,
        find_projects_uc=find_projects_uc,
        org_id=config.snyk.org_id,
        org_slug=config.snyk.org_slug,
        logger=logger,
    )

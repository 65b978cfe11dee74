from __future__ import annotations

import asyncio
from typing import Any

from .config import AppConfig
from .container import Container
from ..core.domain.models import OrgContext


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def _org(
    container: Container,
    org_id: str | None,
    org_slug: str | None,
    *,
    require_slug: bool = True,
) -> OrgContext:
    """Runtime params override config; missing values raise ConfigurationError."""
    return OrgContext.resolve(
        org_id or container.config.snyk.org_id(),
        org_slug or container.config.snyk.org_slug(),
        require_slug=require_slug,
    )


def get_issues(
    repo: str | None = None,
    *,
    status: str = "open",
    severity: str | None = None,
    org_id: str | None = None,
    org_slug: str | None = None,
    config: AppConfig | None = None,
) -> dict[str, Any]:
    """List issues of the organization, optionally for one project.

    Args:
        repo: Project UUID, exact project name, or None for all projects
        status: open | resolved | ignored
        severity: low | medium | high | critical (optional)
        org_id: Organization id override (otherwise SNYK_ORG_ID)
        org_slug: Organization slug override (otherwise SNYK_ORG_SLUG)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        {total, count, issues, has_more}

    Raises:
        ConfigurationError: If org id, org slug or API key is missing
        SnykApiError: On upstream failure
    """
    container = _create_container(config)
    try:
        org = _org(container, org_id, org_slug)
        uc = container.get_issues_uc()
        return asyncio.run(uc.execute(org=org, repo=repo, status=status, severity=severity))
    finally:
        container.shutdown_resources()


def get_repo_issues(
    repository_name: str,
    *,
    status: str = "open",
    severity: str | None = None,
    org_id: str | None = None,
    org_slug: str | None = None,
    config: AppConfig | None = None,
) -> dict[str, Any]:
    """Aggregate issues over every project whose name contains repository_name.

    Returns:
        {total, count, repositoryName, matching_projects, projects?, issues, has_more}
    """
    container = _create_container(config)
    try:
        org = _org(container, org_id, org_slug)
        uc = container.get_repo_issues_uc()
        return asyncio.run(
            uc.execute(org=org, repository_name=repository_name, status=status, severity=severity)
        )
    finally:
        container.shutdown_resources()


def get_issue(
    issue_id: str,
    *,
    org_id: str | None = None,
    org_slug: str | None = None,
    config: AppConfig | None = None,
) -> dict[str, Any]:
    """Fetch one issue (by UUID) with remediation details."""
    container = _create_container(config)
    try:
        org = _org(container, org_id, org_slug)
        uc = container.get_issue_uc()
        return asyncio.run(uc.execute(org=org, issue_id=issue_id))
    finally:
        container.shutdown_resources()


def find_projects(
    query: str,
    *,
    org_id: str | None = None,
    config: AppConfig | None = None,
) -> dict[str, Any]:
    """Search projects whose name contains query (case-insensitive).

    Only the organization id is required.
    """
    container = _create_container(config)
    try:
        org = _org(container, org_id, None, require_slug=False)
        uc = container.find_projects_uc()
        return asyncio.run(uc.execute(org=org, query=query))
    finally:
        container.shutdown_resources()

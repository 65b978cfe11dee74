from __future__ import annotations

from typing import Any

from ..domain.envelopes import repository_envelope
from ..domain.models import OrgContext
from ..ports import LoggerPort
from .issue_fetcher import IssueFetcher, validate_filters
from .issue_formatter import IssueFormatter
from .project_resolver import ProjectResolver


class RepositoryIssueAggregator:
    """Collects issues of every project whose name contains a repository name.

    Flow: list projects once -> substring match -> (no match: empty result)
    -> fetch each matched project in turn -> merge.
    A failing project is logged and skipped; the others still contribute.
    """

    def __init__(
        self,
        *,
        resolver: ProjectResolver,
        fetcher: IssueFetcher,
        formatter: IssueFormatter,
        logger: LoggerPort,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self._formatter = formatter
        self._logger = logger

    async def aggregate(
        self,
        org: OrgContext,
        repository_name: str,
        *,
        status: str = "open",
        severity: str | None = None,
    ) -> dict[str, Any]:
        validate_filters(status, severity)
        projects = await self._resolver.search(org.org_id, repository_name)
        self._logger.info(
            "projects_matched",
            type="projects_matched",
            query=repository_name,
            matching_projects=len(projects),
        )
        if not projects:
            return repository_envelope(repository_name, [], [])

        issues: list[dict[str, Any]] = []
        for project in projects:
            try:
                page = await self._fetcher.fetch(
                    org.org_id,
                    status=status,
                    severity=severity,
                    project_id=project.id,
                )
            except Exception as e:
                self._logger.warning(
                    "project_issue_fetch_failed",
                    type="project_issue_fetch_failed",
                    project_id=project.id,
                    error=str(e),
                )
                continue
            issues.extend(self._formatter.format(raw, org.org_slug, project.name) for raw in page.issues)

        return repository_envelope(repository_name, projects, issues)

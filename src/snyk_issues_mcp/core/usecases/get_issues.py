from __future__ import annotations

from typing import Any

from ..domain.envelopes import issues_envelope
from ..domain.identifiers import classify_identifier
from ..domain.models import NameQuery, OrgContext, ProjectId
from ..domain.payloads import scan_item_id_of
from ..ports import LoggerPort, SnykApiPort
from ..services import IssueFetcher, IssueFormatter, ProjectNameCache, ProjectResolver, validate_filters


class GetIssuesUseCase:
    """Use case for listing issues, optionally scoped by project id or name.

    The repo argument is classified first:
    - None: one organization-wide fetch
    - ProjectId: one fetch scoped to that project, no project lookup
    - NameQuery: exact-name resolution, then one fetch per resolved project

    Project names for the `repository` field come from a per-call cache.
    """

    def __init__(
        self,
        *,
        snyk_api: SnykApiPort,
        resolver: ProjectResolver,
        fetcher: IssueFetcher,
        formatter: IssueFormatter,
        logger: LoggerPort,
    ) -> None:
        self._api = snyk_api
        self._resolver = resolver
        self._fetcher = fetcher
        self._formatter = formatter
        self._logger = logger

    async def execute(
        self,
        *,
        org: OrgContext,
        repo: str | None = None,
        status: str = "open",
        severity: str | None = None,
    ) -> dict[str, Any]:
        """Execute the use case.

        Args:
            org: Organization scope (org_slug required for links)
            repo: Project UUID, exact project name, or None for all projects
            status: Issue status filter
            severity: Optional severity filter

        Returns:
            {total, count, issues, has_more}
        """
        validate_filters(status, severity)
        names = ProjectNameCache(snyk_api=self._api, org_id=org.org_id, logger=self._logger)
        identifier = classify_identifier(repo)

        if isinstance(identifier, NameQuery):
            projects = await self._resolver.resolve(org.org_id, identifier.text)
            if not projects:
                return issues_envelope([], False)
            project_ids: list[str | None] = []
            for project in projects:
                names.remember(project.id, project.name)
                project_ids.append(project.id)
        elif isinstance(identifier, ProjectId):
            project_ids = [identifier.value]
        else:
            project_ids = [None]

        raw_issues: list[dict[str, Any]] = []
        has_more = False
        for project_id in project_ids:
            page = await self._fetcher.fetch(
                org.org_id,
                status=status,
                severity=severity,
                project_id=project_id,
            )
            raw_issues.extend(page.issues)
            has_more = has_more or page.has_next_page

        await names.ensure(pid for pid in (scan_item_id_of(raw) for raw in raw_issues) if pid)

        issues = [
            self._formatter.format(raw, org.org_slug, names.repository_for(scan_item_id_of(raw)))
            for raw in raw_issues
        ]
        return issues_envelope(issues, has_more)

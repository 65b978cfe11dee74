from __future__ import annotations

from ..domain.models import VALID_SEVERITIES, VALID_STATUSES, IssuePage
from ..ports import LoggerPort, SnykApiPort


ISSUE_PAGE_LIMIT = 100


def validate_filters(status: str, severity: str | None) -> None:
    """Raise ValueError for unknown status or severity values."""
    if status not in VALID_STATUSES:
        raise ValueError(f"Invalid status: {status}. Must be one of {', '.join(VALID_STATUSES)}.")
    if severity is not None and severity not in VALID_SEVERITIES:
        raise ValueError(f"Invalid severity: {severity}. Must be one of {', '.join(VALID_SEVERITIES)}.")


class IssueFetcher:
    """Retrieves one page of organization issues.

    Pagination is not followed; has_next_page only reports whether the
    upstream response carried a "next" link.
    """

    def __init__(self, *, snyk_api: SnykApiPort, logger: LoggerPort) -> None:
        self._api = snyk_api
        self._logger = logger

    async def fetch(
        self,
        org_id: str,
        *,
        status: str = "open",
        severity: str | None = None,
        project_id: str | None = None,
    ) -> IssuePage:
        """Fetch issues, optionally scoped to one project.

        Raises:
            ValueError: If status or severity is not a known value
            SnykApiError: On upstream failure (never retried)
        """
        validate_filters(status, severity)

        response = await self._api.list_issues(
            org_id,
            status=[status],
            severity=[severity] if severity else None,
            scan_item_id=project_id,
            scan_item_type="project" if project_id else None,
            limit=ISSUE_PAGE_LIMIT,
        )
        page = IssuePage(issues=list(response.data), has_next_page=bool(response.next_link))

        self._logger.debug(
            "issues_fetched",
            type="issues_fetched",
            org_id=org_id,
            project_id=project_id,
            status=status,
            severity=severity,
            count=len(page.issues),
            has_next_page=page.has_next_page,
        )
        return page

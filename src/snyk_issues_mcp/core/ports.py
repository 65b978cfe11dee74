from __future__ import annotations

from typing import Any, Optional, Protocol

from .domain.models import IssuesResponse


class SnykApiPort(Protocol):
    """Port for the Snyk REST API.

    Implementations return raw JSON:API records (plain dicts) and raise
    SnykApiError for any non-2xx response or transport failure.
    """

    async def list_issues(
        self,
        org_id: str,
        *,
        status: list[str],
        severity: Optional[list[str]] = None,
        scan_item_id: Optional[str] = None,
        scan_item_type: Optional[str] = None,
        limit: int = 100,
    ) -> IssuesResponse:
        """List one page of organization issues.

        Args:
            org_id: Organization id
            status: Status filter values (open, resolved, ignored)
            severity: Effective severity filter values (optional)
            scan_item_id: Restrict to issues found in this scan target (optional)
            scan_item_type: Type of the scan target, e.g. "project"
            limit: Page size

        Returns:
            Raw issue records plus the "next" pagination link, if any
        """
        ...

    async def list_projects(
        self,
        org_id: str,
        *,
        names: Optional[list[str]] = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """List organization projects, optionally filtered by exact names."""
        ...

    async def get_project(self, org_id: str, project_id: str) -> dict[str, Any]:
        """Fetch a single raw project record."""
        ...

    async def get_issue(self, org_id: str, issue_id: str) -> Optional[dict[str, Any]]:
        """Fetch a single raw issue record, None when the response has no data."""
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword fields end up as structured fields of the log record.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        ...

    def exception(self, message: str, **kwargs: Any) -> None:
        ...

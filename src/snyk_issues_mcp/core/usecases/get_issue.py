from __future__ import annotations

from typing import Any

from ..domain.exceptions import IssueNotFoundError
from ..domain.identifiers import is_uuid
from ..domain.models import OrgContext
from ..domain.payloads import RawIssue
from ..ports import SnykApiPort
from ..services import IssueFormatter


class GetIssueUseCase:
    """Use case for retrieving one issue with remediation details."""

    def __init__(self, *, snyk_api: SnykApiPort, formatter: IssueFormatter) -> None:
        self._api = snyk_api
        self._formatter = formatter

    async def execute(self, *, org: OrgContext, issue_id: str) -> dict[str, Any]:
        """Execute the use case.

        Args:
            org: Organization scope
            issue_id: Issue UUID (not the issue key such as SNYK-JS-...)

        Raises:
            ValueError: If issue_id is not a UUID
            IssueNotFoundError: If the response carries no issue data
            SnykApiError: On upstream failure
        """
        if not is_uuid(issue_id):
            raise ValueError(f"issue_id must be a UUID, not an issue key: {issue_id}")

        raw = await self._api.get_issue(org.org_id, issue_id)
        if raw is None or not RawIssue.from_payload(raw).has_attributes:
            raise IssueNotFoundError(issue_id)
        return self._formatter.format_detail(raw, org.org_slug)

from __future__ import annotations

from typing import Any

from ..domain.models import OrgContext
from ..services import RepositoryIssueAggregator


class GetRepoIssuesUseCase:
    """Use case for aggregating issues across all projects of a repository.

    Matching is a case-insensitive substring over project names, so one
    repository usually maps to several projects (one per manifest).
    """

    def __init__(self, *, aggregator: RepositoryIssueAggregator) -> None:
        self._aggregator = aggregator

    async def execute(
        self,
        *,
        org: OrgContext,
        repository_name: str,
        status: str = "open",
        severity: str | None = None,
    ) -> dict[str, Any]:
        """Execute the use case.

        Returns:
            {total, count, repositoryName, matching_projects, projects?, issues, has_more}
        """
        return await self._aggregator.aggregate(
            org,
            repository_name,
            status=status,
            severity=severity,
        )

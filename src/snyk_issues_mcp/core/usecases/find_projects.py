from __future__ import annotations

from typing import Any

from ..domain.models import OrgContext
from ..services import ProjectResolver


class FindProjectsUseCase:
    """Use case for searching projects by a substring of their name."""

    def __init__(self, *, resolver: ProjectResolver) -> None:
        self._resolver = resolver

    async def execute(self, *, org: OrgContext, query: str) -> dict[str, Any]:
        """Execute the use case.

        Returns:
            {total, query, projects: [{projectId, projectName}]}
        """
        projects = await self._resolver.search(org.org_id, query)
        return {
            "total": len(projects),
            "query": query,
            "projects": [p.to_dict() for p in projects],
        }

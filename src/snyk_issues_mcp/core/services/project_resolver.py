from __future__ import annotations

from ..domain.models import Project
from ..domain.payloads import parse_project
from ..ports import SnykApiPort


PROJECT_PAGE_LIMIT = 100


class ProjectResolver:
    """Maps free-text names to project records.

    Two lookup styles:
    - resolve(): exact name match performed upstream via the `names` filter
    - search(): one catalog listing, filtered locally by case-insensitive substring
    """

    def __init__(self, *, snyk_api: SnykApiPort) -> None:
        self._api = snyk_api

    async def resolve(self, org_id: str, name: str) -> list[Project]:
        """Return projects whose name matches exactly (empty list if none).

        Raises:
            SnykApiError: On upstream failure
        """
        raw = await self._api.list_projects(org_id, names=[name])
        return [p for p in (parse_project(r) for r in raw) if p is not None]

    async def search(self, org_id: str, query: str) -> list[Project]:
        """Return projects whose name contains query, ignoring case.

        Raises:
            SnykApiError: On upstream failure
        """
        raw = await self._api.list_projects(org_id, limit=PROJECT_PAGE_LIMIT)
        needle = query.lower()
        matches: list[Project] = []
        for record in raw:
            project = parse_project(record)
            if project is not None and needle in project.name.lower():
                matches.append(project)
        return matches

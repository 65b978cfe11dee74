from __future__ import annotations

import asyncio
from typing import Iterable, Mapping

from ..domain.payloads import parse_project
from ..ports import LoggerPort, SnykApiPort


class ProjectNameCache:
    """Project-id -> project-name memo for a single tool call.

    Create one per call and drop it afterwards; it is never shared.
    """

    def __init__(self, *, snyk_api: SnykApiPort, org_id: str, logger: LoggerPort) -> None:
        self._api = snyk_api
        self._org_id = org_id
        self._logger = logger
        self._names: dict[str, str] = {}

    @property
    def names(self) -> Mapping[str, str]:
        return dict(self._names)

    def remember(self, project_id: str, name: str) -> None:
        """Record a name that is already known (e.g. from project resolution)."""
        if name:
            self._names[project_id] = name

    async def ensure(self, project_ids: Iterable[str]) -> Mapping[str, str]:
        """Look up every unknown id concurrently.

        A failed lookup is logged and the id stays unmapped.
        """
        missing = sorted({pid for pid in project_ids if pid and pid not in self._names})
        if missing:
            await asyncio.gather(*(self._lookup(pid) for pid in missing))
        return self.names

    def repository_for(self, project_id: str | None) -> str | None:
        """Display name for a project: its name, else its raw id, else None."""
        if not project_id:
            return None
        return self._names.get(project_id) or project_id

    async def _lookup(self, project_id: str) -> None:
        try:
            raw = await self._api.get_project(self._org_id, project_id)
        except Exception as e:
            self._logger.warning(
                "project_name_lookup_failed",
                type="project_name_lookup_failed",
                project_id=project_id,
                error=str(e),
            )
            return
        project = parse_project(raw)
        if project is not None and project.name:
            self._names[project_id] = project.name

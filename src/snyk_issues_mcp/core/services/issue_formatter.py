from __future__ import annotations

from typing import Any

from ..domain.payloads import Coordinate, RawIssue


DEFAULT_WEB_URL = "https://app.snyk.io"


class IssueFormatter:
    """Normalizes raw upstream issues into the public tool shape.

    Pure and deterministic: the same raw issue, org slug and repository name
    always produce the same output.
    """

    def __init__(self, *, web_url: str = DEFAULT_WEB_URL) -> None:
        self._web_url = web_url.rstrip("/")

    def issue_url(self, org_slug: str | None, project_id: str | None, key: str | None) -> str:
        """Deep link into the web UI. Missing parts render as 'None'."""
        return f"{self._web_url}/org/{org_slug}/project/{project_id}#issue-{key}"

    def format(
        self,
        raw: Any,
        org_slug: str | None,
        repository_name: str | None = None,
    ) -> dict[str, Any]:
        """Format one issue for list results.

        Args:
            raw: Raw JSON:API issue record
            org_slug: Organization slug used for the deep link
            repository_name: Resolved project name; falls back to the project id
        """
        issue = RawIssue.from_payload(raw)
        attrs = issue.attributes
        project_id = issue.scan_item_id
        first = attrs.coordinates[0] if attrs.coordinates else Coordinate()

        return {
            "id": issue.id,
            "title": attrs.title,
            "effective_severity_level": attrs.effective_severity_level,
            "status": attrs.status,
            "type": attrs.type,
            "created_at": attrs.created_at,
            "updated_at": attrs.updated_at,
            "ignored": attrs.ignored,
            "key": attrs.key,
            "repository": repository_name or project_id or None,
            "project_id": project_id,
            "locations": _locations(first),
            "dependencies": _dependencies(first),
            "problems": attrs.problems,
            "coordinates": attrs.coordinates_raw,
            "url": self.issue_url(org_slug, project_id, attrs.key),
            "scan_item_id": project_id,
        }

    def format_detail(self, raw: Any, org_slug: str | None) -> dict[str, Any]:
        """Format one issue with remediation data for the single-issue view.

        Unlike list results, url is None when the issue has no project.
        """
        issue = RawIssue.from_payload(raw)
        attrs = issue.attributes
        project_id = issue.scan_item_id

        remedies = [
            {"type": r.type, "description": r.description, "details": r.details}
            for coord in attrs.coordinates
            for r in coord.remedies
        ]
        upgrades = [
            {
                "package_name": rep.dependency.package_name,
                "current_version": rep.dependency.package_version,
                "recommended_version": rep.dependency.fixed_in[0] if rep.dependency.fixed_in else None,
            }
            for coord in attrs.coordinates
            for rep in coord.representations
            if rep.dependency is not None
        ]

        return {
            "id": issue.id,
            "title": attrs.title,
            "description": _description(attrs.problems),
            "effective_severity_level": attrs.effective_severity_level,
            "status": attrs.status,
            "type": attrs.type,
            "created_at": attrs.created_at,
            "updated_at": attrs.updated_at,
            "key": attrs.key,
            "url": self.issue_url(org_slug, project_id, attrs.key) if project_id else None,
            "project_id": project_id,
            "problems": attrs.problems,
            "coordinates": attrs.coordinates_raw,
            "remedies": remedies,
            "upgrades": upgrades,
            "classes": attrs.classes,
        }


def _locations(coord: Coordinate) -> list[dict[str, Any]]:
    return [
        {
            "filepath": rep.source_location.file,
            "line": rep.source_location.start.line,
            "column": rep.source_location.start.column,
        }
        for rep in coord.representations
        if rep.source_location is not None
    ]


def _dependencies(coord: Coordinate) -> list[dict[str, Any]]:
    return [
        {
            "package_name": rep.dependency.package_name,
            "package_version": rep.dependency.package_version,
        }
        for rep in coord.representations
        if rep.dependency is not None
    ]


def _description(problems: list[Any]) -> str | None:
    first = problems[0] if problems else None
    disclosed = first.get("disclosed_at") if isinstance(first, dict) else None
    return f"Disclosed: {disclosed}" if disclosed else None

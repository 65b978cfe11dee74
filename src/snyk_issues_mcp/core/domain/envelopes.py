from __future__ import annotations

from typing import Any, Sequence

from .models import Project


def issues_envelope(issues: list[dict[str, Any]], has_more: bool) -> dict[str, Any]:
    """Result of unscoped, project-id or exact-name queries."""
    return {
        "total": len(issues),
        "count": len(issues),
        "issues": issues,
        "has_more": has_more,
    }


def repository_envelope(
    repository_name: str,
    projects: Sequence[Project],
    issues: list[dict[str, Any]],
) -> dict[str, Any]:
    """Result of repository-name aggregation.

    has_more is always False: per-project pages beyond the first are not followed.
    """
    envelope: dict[str, Any] = {
        "total": len(issues),
        "count": len(issues),
        "repositoryName": repository_name,
        "matching_projects": len(projects),
    }
    if projects:
        envelope["projects"] = [p.to_dict() for p in projects]
    envelope["issues"] = issues
    envelope["has_more"] = False
    return envelope

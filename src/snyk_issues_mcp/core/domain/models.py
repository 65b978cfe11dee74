from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from .exceptions import ConfigurationError


IssueStatus = Literal["open", "resolved", "ignored"]
Severity = Literal["low", "medium", "high", "critical"]

VALID_STATUSES: tuple[str, ...] = ("open", "resolved", "ignored")
VALID_SEVERITIES: tuple[str, ...] = ("low", "medium", "high", "critical")


@dataclass(frozen=True)
class OrgContext:
    """Organization scope for one tool call.

    org_id addresses the API; org_slug is only used to build web links.
    """
    org_id: str
    org_slug: str | None = None

    @classmethod
    def resolve(
        cls,
        org_id: str | None,
        org_slug: str | None,
        *,
        require_slug: bool = True,
    ) -> "OrgContext":
        """Build a context from explicit values, failing on missing ones.

        Raises:
            ConfigurationError: If org_id (or org_slug when required) is empty
        """
        if not org_id:
            raise ConfigurationError("SNYK_ORG_ID")
        if require_slug and not org_slug:
            raise ConfigurationError("SNYK_ORG_SLUG")
        return cls(org_id=org_id, org_slug=org_slug or None)


@dataclass(frozen=True)
class Project:
    """A scanned unit (one manifest in one repository)."""
    id: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"projectId": self.id, "projectName": self.name}


@dataclass(frozen=True)
class ProjectId:
    value: str


@dataclass(frozen=True)
class NameQuery:
    text: str


Identifier = ProjectId | NameQuery


@dataclass
class IssuesResponse:
    """One raw page as returned by the upstream issues endpoint."""
    data: list[dict[str, Any]] = field(default_factory=list)
    next_link: str | None = None


@dataclass
class IssuePage:
    """Raw issues of one fetch plus whether more pages exist."""
    issues: list[dict[str, Any]]
    has_next_page: bool

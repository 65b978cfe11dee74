"""Nullable models for upstream (Snyk REST) payloads.

Every parser accepts arbitrary input and falls back to the declared default
for each field that is missing or has an unexpected type, so one malformed
nested value never fails the whole issue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import Project


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> int | None:
    # bool is an int subclass; a boolean line number is garbage
    if isinstance(value, bool):
        return None
    return value if isinstance(value, int) else None


def _as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


@dataclass(frozen=True)
class SourcePosition:
    line: int | None = None
    column: int | None = None

    @classmethod
    def from_payload(cls, data: Any) -> "SourcePosition":
        d = _as_dict(data)
        return cls(line=_as_int(d.get("line")), column=_as_int(d.get("column")))


@dataclass(frozen=True)
class SourceLocation:
    file: str | None = None
    start: SourcePosition = field(default_factory=SourcePosition)

    @classmethod
    def from_payload(cls, data: Any) -> "SourceLocation":
        d = _as_dict(data)
        region = _as_dict(d.get("region"))
        return cls(file=_as_str(d.get("file")), start=SourcePosition.from_payload(region.get("start")))


@dataclass(frozen=True)
class DependencyInfo:
    package_name: str | None = None
    package_version: str | None = None
    fixed_in: tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, data: Any) -> "DependencyInfo":
        d = _as_dict(data)
        fixed = tuple(v for v in _as_list(d.get("fixed_in")) if isinstance(v, str))
        return cls(
            package_name=_as_str(d.get("package_name")),
            package_version=_as_str(d.get("package_version")),
            fixed_in=fixed,
        )


@dataclass(frozen=True)
class Representation:
    """One representation of a coordinate; either side may be absent."""
    source_location: SourceLocation | None = None
    dependency: DependencyInfo | None = None

    @classmethod
    def from_payload(cls, data: Any) -> "Representation":
        d = _as_dict(data)
        src = d.get("sourceLocation")
        dep = d.get("dependency")
        return cls(
            source_location=SourceLocation.from_payload(src) if isinstance(src, dict) else None,
            dependency=DependencyInfo.from_payload(dep) if isinstance(dep, dict) else None,
        )


@dataclass(frozen=True)
class Remedy:
    type: str | None = None
    description: str | None = None
    details: Any = None

    @classmethod
    def from_payload(cls, data: Any) -> "Remedy":
        d = _as_dict(data)
        return cls(
            type=_as_str(d.get("type")),
            description=_as_str(d.get("description")),
            details=d.get("details"),
        )


@dataclass(frozen=True)
class Coordinate:
    representations: tuple[Representation, ...] = ()
    remedies: tuple[Remedy, ...] = ()

    @classmethod
    def from_payload(cls, data: Any) -> "Coordinate":
        d = _as_dict(data)
        return cls(
            representations=tuple(Representation.from_payload(r) for r in _as_list(d.get("representations"))),
            remedies=tuple(Remedy.from_payload(r) for r in _as_list(d.get("remedies"))),
        )


@dataclass(frozen=True)
class IssueAttributes:
    """Issue attributes.

    problems, coordinates_raw and classes are kept verbatim for passthrough;
    coordinates is the parsed view used for extraction.
    """
    title: str | None = None
    effective_severity_level: str | None = None
    status: str | None = None
    type: Any = None
    created_at: str | None = None
    updated_at: str | None = None
    ignored: bool | None = None
    key: str | None = None
    problems: list[Any] = field(default_factory=list)
    classes: list[Any] = field(default_factory=list)
    coordinates_raw: list[Any] = field(default_factory=list)
    coordinates: tuple[Coordinate, ...] = ()

    @classmethod
    def from_payload(cls, data: Any) -> "IssueAttributes":
        d = _as_dict(data)
        coords = _as_list(d.get("coordinates"))
        return cls(
            title=_as_str(d.get("title")),
            effective_severity_level=_as_str(d.get("effective_severity_level")),
            status=_as_str(d.get("status")),
            type=d.get("type"),
            created_at=_as_str(d.get("created_at")),
            updated_at=_as_str(d.get("updated_at")),
            ignored=_as_bool(d.get("ignored")),
            key=_as_str(d.get("key")),
            problems=_as_list(d.get("problems")),
            classes=_as_list(d.get("classes")),
            coordinates_raw=coords,
            coordinates=tuple(Coordinate.from_payload(c) for c in coords),
        )


@dataclass(frozen=True)
class RawIssue:
    id: str | None = None
    attributes: IssueAttributes = field(default_factory=IssueAttributes)
    scan_item_id: str | None = None
    has_attributes: bool = False

    @classmethod
    def from_payload(cls, data: Any) -> "RawIssue":
        d = _as_dict(data)
        attrs = d.get("attributes")
        relationships = _as_dict(d.get("relationships"))
        scan_item = _as_dict(_as_dict(relationships.get("scan_item")).get("data"))
        return cls(
            id=_as_str(d.get("id")),
            attributes=IssueAttributes.from_payload(attrs),
            scan_item_id=_as_str(scan_item.get("id")) or None,
            has_attributes=isinstance(attrs, dict),
        )


def scan_item_id_of(issue: Any) -> str | None:
    """Project back-reference of a raw issue, or None."""
    return RawIssue.from_payload(issue).scan_item_id


def parse_project(data: Any) -> Project | None:
    """Parse a raw project record; records without an id are dropped."""
    d = _as_dict(data)
    project_id = _as_str(d.get("id"))
    if not project_id:
        return None
    name = _as_str(_as_dict(d.get("attributes")).get("name")) or ""
    return Project(id=project_id, name=name)

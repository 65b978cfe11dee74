from __future__ import annotations

import re

from .models import Identifier, NameQuery, ProjectId


_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_uuid(text: str) -> bool:
    """True if text is exactly a canonical 8-4-4-4-12 hex UUID (any case)."""
    return _UUID_RE.fullmatch(text) is not None


def classify_identifier(text: str | None) -> Identifier | None:
    """Classify caller input as a project id, a name query, or no filter.

    Only None or the empty string mean "no project filter". The text is
    classified as given: whitespace-only input is a name query and a padded
    UUID is not a project id.
    """
    if not text:
        return None
    if is_uuid(text):
        return ProjectId(text)
    return NameQuery(text)

"""Domain exceptions for snyk_issues_mcp."""

from __future__ import annotations

import json
from typing import Any


class ConfigurationError(Exception):
    """Raised when a required setting (org id, org slug, API token) is missing.

    Raised before any network call is made.
    """

    def __init__(self, missing: str, message: str | None = None) -> None:
        self.missing = missing
        if message is None:
            message = f"{missing} must be set in environment variables or passed as parameter"
        super().__init__(message)


class SnykApiError(Exception):
    """Raised for any non-2xx response or transport failure from the Snyk API.

    Keeps the HTTP status code (None for transport failures) and the raw
    error body so callers can surface them unchanged.
    """

    def __init__(self, status_code: int | None, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Snyk API error: {status_code} - {_dump_body(body)}")


class IssueNotFoundError(Exception):
    """Raised when the issue endpoint answers without issue data."""

    def __init__(self, issue_id: str) -> None:
        self.issue_id = issue_id
        super().__init__(f"Issue {issue_id} not found")


def _dump_body(body: Any) -> str:
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(body)

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.domain.exceptions import ConfigurationError, SnykApiError
from ..core.domain.models import IssuesResponse

logger = logging.getLogger(__name__)


DEFAULT_API_URL = "https://api.snyk.io/rest"
DEFAULT_API_VERSION = "2024-11-05"


class SnykRestClient:
    """Async Snyk REST client implementing SnykApiPort.

    Opens one httpx.AsyncClient per request, so an instance can be reused
    across event loops. Retries are left to the caller.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = DEFAULT_API_URL,
        version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._version = version
        self._timeout = timeout
        self._transport = transport

    async def list_issues(
        self,
        org_id: str,
        *,
        status: list[str],
        severity: Optional[list[str]] = None,
        scan_item_id: Optional[str] = None,
        scan_item_type: Optional[str] = None,
        limit: int = 100,
    ) -> IssuesResponse:
        params: dict[str, Any] = {"status": ",".join(status), "limit": limit}
        if severity:
            params["effective_severity_level"] = ",".join(severity)
        if scan_item_id:
            params["scan_item.id"] = scan_item_id
            params["scan_item.type"] = scan_item_type or "project"

        body = await self._get(f"/orgs/{org_id}/issues", params)
        data = body.get("data")
        links = body.get("links")
        next_link = links.get("next") if isinstance(links, dict) else None
        return IssuesResponse(
            data=[d for d in data if isinstance(d, dict)] if isinstance(data, list) else [],
            next_link=next_link if isinstance(next_link, str) and next_link else None,
        )

    async def list_projects(
        self,
        org_id: str,
        *,
        names: Optional[list[str]] = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"limit": limit}
        if names:
            # Repeated parameter; commas inside a name must not split it
            params["names"] = list(names)
        body = await self._get(f"/orgs/{org_id}/projects", params)
        data = body.get("data")
        return [d for d in data if isinstance(d, dict)] if isinstance(data, list) else []

    async def get_project(self, org_id: str, project_id: str) -> dict[str, Any]:
        body = await self._get(f"/orgs/{org_id}/projects/{project_id}", {})
        data = body.get("data")
        return data if isinstance(data, dict) else {}

    async def get_issue(self, org_id: str, issue_id: str) -> Optional[dict[str, Any]]:
        body = await self._get(f"/orgs/{org_id}/issues/{issue_id}", {})
        data = body.get("data")
        return data if isinstance(data, dict) else None

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self._api_key:
            raise ConfigurationError("SNYK_API_KEY")

        query = {"version": self._version, **params}
        headers = {
            "Authorization": f"token {self._api_key}",
            "Accept": "application/vnd.api+json",
        }
        logger.debug("snyk_request", extra={"path": path, "params": query})

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params=query)
        except httpx.HTTPError as e:
            raise SnykApiError(None, str(e)) from e

        if response.is_error:
            raise SnykApiError(response.status_code, _error_body(response))

        try:
            body = response.json()
        except ValueError as e:
            raise SnykApiError(response.status_code, response.text) from e
        return body if isinstance(body, dict) else {}


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text

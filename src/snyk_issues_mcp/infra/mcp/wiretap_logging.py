from __future__ import annotations

import logging
import time

from fastmcp.server.middleware import Middleware, MiddlewareContext
from snyk_issues_mcp.shared.to_jsonable import to_jsonable

logger = logging.getLogger(__name__)


class WiretapLoggingMiddleware(Middleware):
    """Logs every MCP request and response (or failure) as structured records."""

    def __init__(self, logger_name: str | None = None) -> None:
        self._logger = logging.getLogger(logger_name) if logger_name else logger

    async def on_message(self, ctx: MiddlewareContext, call_next):
        # tools/call messages carry the tool name; other methods do not
        tool = getattr(ctx.message, "name", None)
        # 'message' is reserved by logging
        self._logger.info("mcp_request", extra={
            "type": "request",
            "method": ctx.method,
            "tool": tool,
            "mcp_message": to_jsonable(ctx.message),
        })
        started = time.perf_counter()
        try:
            result = await call_next(ctx)
        except Exception as e:
            self._logger.warning("mcp_error", extra={
                "type": "error",
                "method": ctx.method,
                "tool": tool,
                "error": str(e),
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            })
            raise
        self._logger.info("mcp_response", extra={
            "type": "response",
            "method": ctx.method,
            "tool": tool,
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            "mcp_result": to_jsonable(result),
        })
        return result

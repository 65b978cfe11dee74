from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler


class ToolLogger(Resource):
    """Structured logger shared by the tool use cases.

    Writes JSONL to `<logs_dir>/tools.jsonl` when file output is enabled and
    human-readable lines to stderr when console output is enabled.
    """

    def init(
        self,
        *,
        logs_dir: Path,
        logger_name: str = "snyk_issues_mcp",
        file_output: bool = True,
        console_output: bool = False,
        level: str = "INFO",
        max_bytes: int = 10_000_000,
        backup_count: int = 3,
    ) -> "ToolLogger":
        """Attach handlers to the named logger.

        Args:
            logs_dir: Directory for the JSONL log file
            logger_name: Logger name
            file_output: Whether to write tools.jsonl
            console_output: Whether to log to stderr
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            max_bytes: Rotate tools.jsonl at this size (0 disables rotation)
            backup_count: Rotated files to keep

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers = []

        if file_output:
            file_handler = build_json_file_handler(
                Path(logs_dir) / "tools.jsonl",
                level=numeric_level,
                max_bytes=max_bytes,
                backup_count=backup_count,
            )
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "ToolLogger") -> None:
        """Flush and close all handlers."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with optional extra fields."""
        self._logger.debug(message, extra=kwargs or None)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with optional extra fields."""
        self._logger.info(message, extra=kwargs or None)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with optional extra fields."""
        self._logger.warning(message, extra=kwargs or None)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """Log error message with optional extra fields and exception info."""
        self._logger.error(message, extra=kwargs or None, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback and optional extra fields."""
        self._logger.exception(message, extra=kwargs or None)

from __future__ import annotations

from .logger import ToolLogger
from .handlers import build_json_file_handler, build_human_console_handler
from .formatters import JSONFormatter, HumanReadableFormatter, record_fields

__all__ = [
    "ToolLogger",
    "build_json_file_handler",
    "build_human_console_handler",
    "JSONFormatter",
    "HumanReadableFormatter",
    "record_fields",
]

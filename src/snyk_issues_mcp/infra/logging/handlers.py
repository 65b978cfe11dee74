from __future__ import annotations

import logging
import sys
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .formatters import JSONFormatter, HumanReadableFormatter


def build_json_file_handler(
    path: Path,
    level: int = logging.INFO,
    max_bytes: int = 0,
    backup_count: int = 0,
) -> Handler:
    """JSONL handler appending to path.

    All tool calls share one file, so it rotates once max_bytes is reached
    (0 disables rotation).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    h = RotatingFileHandler(path, encoding="utf-8", mode="a", maxBytes=max_bytes, backupCount=backup_count)
    h.setLevel(level)
    h.setFormatter(JSONFormatter())
    return h


def build_human_console_handler(level: int = logging.INFO) -> Handler:
    # stdout is reserved for the MCP stdio transport
    h = logging.StreamHandler(sys.stderr)
    h.setLevel(level)
    h.setFormatter(HumanReadableFormatter())
    return h

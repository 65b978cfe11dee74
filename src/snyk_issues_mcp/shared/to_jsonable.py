from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any


def to_jsonable(obj: Any) -> Any:
    """Convert MCP messages and results to JSON-serializable data for logging.

    Handles:
    - Basic types (str, int, float, bool, None)
    - Collections (list, tuple, set, dict)
    - Pydantic v2 models (MCP protocol types)
    - Dataclasses
    - Bytes/Bytearray (hex)
    - Anything else via str()
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if hasattr(obj, "model_dump"):
        return to_jsonable(obj.model_dump())
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))
    if hasattr(obj, "__dict__"):
        return to_jsonable(vars(obj))
    return str(obj)

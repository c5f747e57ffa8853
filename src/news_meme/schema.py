"""Helpers to load the tool descriptors and validate call arguments."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import ToolArgumentError


def default_schema_path() -> Path:
    """Return the path to the packaged tool descriptor file."""
    return Path(__file__).resolve().with_name("tool_schemas.json")


@lru_cache(maxsize=1)
def load_tool_descriptors(path: Optional[Path | str] = None) -> List[Dict[str, Any]]:
    """Load and cache the tool descriptors (name, description, inputSchema)."""
    schema_path = Path(path) if path else default_schema_path()
    return json.loads(schema_path.read_text(encoding="utf-8"))["tools"]


def tool_names() -> List[str]:
    return [tool["name"] for tool in load_tool_descriptors()]


def get_tool_descriptor(name: str) -> Dict[str, Any]:
    for tool in load_tool_descriptors():
        if tool["name"] == name:
            return tool
    raise ToolArgumentError(f"Unknown tool: {name}")


def format_errors(errors: Iterable[ValidationError]) -> str:
    """Turn jsonschema errors into a concise human-readable string."""
    parts = []
    for err in errors:
        location = ".".join(str(piece) for piece in err.absolute_path) or "<root>"
        parts.append(f"{location}: {err.message}")
    return "; ".join(parts)


def validate_tool_arguments(name: str, arguments: Any) -> Dict[str, Any]:
    """
    Validate call arguments against the tool's input schema.

    Raises ToolArgumentError with a readable message if validation fails.
    Keys the schema does not declare are dropped from the returned dict.
    """
    schema = get_tool_descriptor(name)["inputSchema"]
    payload = {} if arguments is None else arguments
    validator = Draft202012Validator(schema)
    errors = list(validator.iter_errors(payload))
    if errors:
        raise ToolArgumentError(f"Invalid arguments for {name}: {format_errors(errors)}")
    declared = schema.get("properties", {})
    return {key: value for key, value in payload.items() if key in declared}

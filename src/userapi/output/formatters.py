"""Human/JSON output helpers.

The CLI renders ServiceResult for humans (key-value text) or machines
(--json). The API layer does its own serialization and never uses this.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from userapi.services.result import ServiceResult


def _format_user_line(user: dict[str, Any]) -> str:
    parts = [f"#{user['id']}", str(user["name"]), str(user["date_of_birth"])]
    if "age" in user:
        parts.append(f"age {user['age']}")
    return "  " + "  ".join(parts)


def _format_data_human(data: dict[str, Any]) -> str:
    """Format result data as indented key-value pairs, users one per line."""
    lines: list[str] = []
    for key, value in data.items():
        if key == "users" and isinstance(value, list):
            lines.extend(_format_user_line(user) for user in value)
        elif isinstance(value, (dict, list)):
            lines.append(f"  {key}: {_json.dumps(value, separators=(',', ':'))}")
        else:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if result.ok:
        parts = [f"OK: {result.op}"]
        if result.data:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)
    if result.error is None:
        return f"ERROR: {result.op}: Unknown error"
    return f"ERROR: {result.op}: [{result.error.code}] {result.error.message}"

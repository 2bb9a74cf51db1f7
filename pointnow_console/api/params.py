# pointnow_console/api/params.py
# SPDX-License-Identifier: Apache-2.0
"""Small coercions shared by resource modules when building query strings."""

from __future__ import annotations

from enum import Enum
from typing import Any, Final

FLAG_VALUES: Final[frozenset[str]] = frozenset({"true", "false"})


def string_flag(name: str, value: str | None) -> str | None:
    """Validate a query flag that the backend expects as ``"true"``/``"false"``.

    Raises:
        ValueError: for booleans or any other value; callers stringify first.
    """
    if value is None:
        return None
    if not isinstance(value, str) or value not in FLAG_VALUES:
        raise ValueError(f"{name} must be the string 'true' or 'false', got {value!r}")
    return value


def enum_value(value: Any) -> str | None:
    if value is None:
        return None
    return value.value if isinstance(value, Enum) else str(value)


def compact(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop None values from a request body."""
    return {k: v for k, v in fields.items() if v is not None}

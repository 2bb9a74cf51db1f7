# pointnow_console/api/users.py
# SPDX-License-Identifier: Apache-2.0
"""User account updates (profile name, email, phone, password)."""

from __future__ import annotations

from typing import Any

from .client import ApiClient


def update_user(client: ApiClient, user_id: str, **fields: Any) -> dict[str, Any]:
    """PATCH the given fields (``name``, ``email``, ``phone_number``,
    ``password``, ``current_password``); fields passed as None are dropped."""
    payload = {k: v for k, v in fields.items() if v is not None}
    return client.patch(f"/users/{user_id}", payload)

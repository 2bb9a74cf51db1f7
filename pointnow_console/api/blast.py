# pointnow_console/api/blast.py
# SPDX-License-Identifier: Apache-2.0
"""Bulk SMS ("blast") endpoints.

`send_otp` returns a nested payload::

    {"message": ..., "data": {"message": ..., "data": {
        "usage_cache": {...post-debit wallet...},
        "otp_response": {"code", "desc", "to", "ref"}}}}

Both halves are kept as sent; callers must not assume a flat shape.
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient


def send_otp(
    client: ApiClient, message: str, phone_numbers: list[str], business_id: str
) -> dict[str, Any]:
    return client.post(
        "/blast/otp",
        {"message": message, "phone_numbers": list(phone_numbers), "business_id": business_id},
    )


def get_variables(client: ApiClient) -> dict[str, Any]:
    """Template variables (``{variable, description}``) usable in blast messages."""
    return client.get("/blast/variables")


def blast_result(response: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a `send_otp` response into ``(usage_cache, otp_response)``."""
    inner = ((response.get("data") or {}).get("data")) or {}
    return inner.get("usage_cache") or {}, inner.get("otp_response") or {}

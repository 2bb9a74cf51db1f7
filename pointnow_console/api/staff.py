# pointnow_console/api/staff.py
# SPDX-License-Identifier: Apache-2.0
"""Staff (employee) endpoints for a business."""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_all(
    client: ApiClient,
    business_id: str,
    *,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    return client.get(with_query(f"/staffs/business/{business_id}", {"page": page, "limit": limit}))


def create(
    client: ApiClient, business_id: str, *, email: str, name: str, phone_number: str
) -> dict[str, Any]:
    """Create a staff user and attach it to the business."""
    return client.post(
        "/staffs/user",
        {"email": email, "name": name, "phone_number": phone_number, "business_id": business_id},
    )


def delete(client: ApiClient, staff_id: str) -> dict[str, Any]:
    return client.delete(f"/staffs/{staff_id}")

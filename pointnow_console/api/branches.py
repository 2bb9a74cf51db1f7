# pointnow_console/api/branches.py
# SPDX-License-Identifier: Apache-2.0
"""Branch (business location) endpoints.

The backend spells the collection ``/branchs``; keep it.
"""

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
    return client.get(
        with_query("/branchs", {"business_id": business_id, "page": page, "limit": limit})
    )


def create(client: ApiClient, business_id: str, name: str) -> dict[str, Any]:
    return client.post("/branchs", {"name": name, "business_id": business_id})


def update(client: ApiClient, branch_id: str, *, name: str | None = None) -> dict[str, Any]:
    payload = {} if name is None else {"name": name}
    return client.patch(f"/branchs/{branch_id}", payload)


def delete(client: ApiClient, branch_id: str) -> dict[str, Any]:
    return client.delete(f"/branchs/{branch_id}")

# pointnow_console/api/rewards.py
# SPDX-License-Identifier: Apache-2.0
"""
Point reward catalogue endpoints.

Query contract notes
--------------------
- ``is_active`` is a query *string* (``"true"`` / ``"false"``), not a boolean.
  Callers stringify first; anything else raises ValueError before a request
  is made.
- The free-text ``query`` argument is sent as ``name``.
- Omitted filters are never sent.
"""

from __future__ import annotations

from typing import Any

from pointnow_console.core.models import RewardType

from .client import ApiClient, with_query
from .params import compact, enum_value, string_flag


def _filters(
    type: RewardType | str | None,
    is_active: str | None,
    page: int | None,
    limit: int | None,
    query: str | None,
) -> dict[str, Any]:
    return {
        "type": enum_value(type),
        "is_active": string_flag("is_active", is_active),
        "page": page,
        "limit": limit,
        "name": query,
    }


def get_all(
    client: ApiClient,
    *,
    business_id: str | None = None,
    type: RewardType | str | None = None,
    is_active: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    query: str | None = None,
) -> dict[str, Any]:
    params = {"business_id": business_id, **_filters(type, is_active, page, limit, query)}
    return client.get(with_query("/point_rewards", params))


def get_by_business(
    client: ApiClient,
    business_id: str,
    *,
    type: RewardType | str | None = None,
    is_active: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    query: str | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            f"/point_rewards/business/{business_id}",
            _filters(type, is_active, page, limit, query),
        )
    )


def get_by_id(client: ApiClient, reward_id: str) -> dict[str, Any]:
    return client.get(f"/point_rewards/{reward_id}")


def create(
    client: ApiClient,
    business_id: str,
    name: str,
    points_cost: int,
    *,
    description: str | None = None,
    type: RewardType | str | None = None,
    is_active: bool | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "business_id": business_id,
        "name": name,
        "points_cost": points_cost,
    }
    payload.update(
        compact(
            {
                "description": description,
                "type": enum_value(type),
                "is_active": is_active,
                "metadata": metadata,
            }
        )
    )
    return client.post("/point_rewards", payload)


def update(client: ApiClient, reward_id: str, **fields: Any) -> dict[str, Any]:
    """PATCH ``name``, ``description``, ``points_cost``, ``type``,
    ``is_active`` or ``metadata``; None values are dropped."""
    if "type" in fields:
        fields["type"] = enum_value(fields["type"])
    return client.patch(f"/point_rewards/{reward_id}", compact(fields))


def delete(client: ApiClient, reward_id: str) -> dict[str, Any]:
    return client.delete(f"/point_rewards/{reward_id}")

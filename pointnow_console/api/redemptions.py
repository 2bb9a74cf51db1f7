# pointnow_console/api/redemptions.py
# SPDX-License-Identifier: Apache-2.0
"""
Point reward redemption endpoints.

All list functions accept the same keyword filters: ``point_reward_id``,
``customer_business_id``, ``business_id``, ``customer_id``, ``status``,
``is_active``, ``page``, ``limit``, ``start_date``, ``end_date``,
``with_customer_detail``, ``with_business_detail``, ``with_reward_detail``.
``is_active`` and the ``with_*`` flags are ``"true"``/``"false"`` strings.
Embedded ``customer`` / ``business`` / ``point_reward`` objects appear in the
response only when the matching ``with_*`` flag is ``"true"``.
"""

from __future__ import annotations

from typing import Any, Final

from pointnow_console.core.models import RedemptionStatus

from .client import ApiClient, with_query
from .params import compact, enum_value, string_flag

# Fixed key order keeps generated URLs stable.
FILTER_KEYS: Final[tuple[str, ...]] = (
    "point_reward_id",
    "customer_business_id",
    "business_id",
    "customer_id",
    "status",
    "is_active",
    "page",
    "limit",
    "start_date",
    "end_date",
    "with_customer_detail",
    "with_business_detail",
    "with_reward_detail",
)


def _filters(filters: dict[str, Any]) -> dict[str, Any]:
    unknown = set(filters) - set(FILTER_KEYS)
    if unknown:
        raise TypeError(f"Unknown redemption filter(s): {', '.join(sorted(unknown))}")
    out: dict[str, Any] = {}
    for key in FILTER_KEYS:
        value = filters.get(key)
        if key == "is_active" or key.startswith("with_"):
            value = string_flag(key, value)
        elif key == "status":
            value = enum_value(value)
        out[key] = value
    return out


def get_all(client: ApiClient, **filters: Any) -> dict[str, Any]:
    return client.get(with_query("/point_reward_redemptions", _filters(filters)))


def get_by_business(client: ApiClient, business_id: str, **filters: Any) -> dict[str, Any]:
    return client.get(
        with_query(
            f"/point_reward_redemptions/business/{business_id}",
            _filters(filters),
        )
    )


def get_by_point_reward(client: ApiClient, point_reward_id: str, **filters: Any) -> dict[str, Any]:
    params = _filters(filters)
    # The reward id goes after the optional filters.
    del params["point_reward_id"]
    params["point_reward_id"] = point_reward_id
    return client.get(with_query("/point_reward_redemptions", params))


def get_by_customer(client: ApiClient, customer_id: str, **filters: Any) -> dict[str, Any]:
    return client.get(
        with_query(
            f"/point_reward_redemptions/customer/{customer_id}",
            _filters(filters),
        )
    )


def get_by_id(client: ApiClient, redemption_id: str) -> dict[str, Any]:
    return client.get(f"/point_reward_redemptions/{redemption_id}")


def create(
    client: ApiClient,
    point_reward_id: str,
    customer_business_id: str,
    *,
    points_deducted: int | None = None,
    status: RedemptionStatus | str | None = None,
    is_active: bool | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "point_reward_id": point_reward_id,
        "customer_business_id": customer_business_id,
    }
    payload.update(
        compact(
            {
                "points_deducted": points_deducted,
                "status": enum_value(status),
                "is_active": is_active,
                "metadata": metadata,
            }
        )
    )
    return client.post("/point_reward_redemptions", payload)


def create_with_customer_id(
    client: ApiClient,
    customer_id: str,
    point_reward_id: str,
    employee_id: str,
    branch_id: str,
    *,
    status: RedemptionStatus | str | None = None,
    is_active: bool | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Redeem at the counter on behalf of a customer.

    The backend debits the customer's per-business balance and attributes
    the redemption to the staff member (``employee_id``) and branch.
    """
    payload: dict[str, Any] = {
        "customer_id": customer_id,
        "point_reward_id": point_reward_id,
        "employee_id": employee_id,
        "branch_id": branch_id,
    }
    payload.update(
        compact({"status": enum_value(status), "is_active": is_active, "metadata": metadata})
    )
    return client.post("/point_reward_redemptions/customer", payload)


def update(
    client: ApiClient,
    redemption_id: str,
    *,
    status: RedemptionStatus | str | None = None,
    is_active: bool | None = None,
) -> dict[str, Any]:
    payload = compact({"status": enum_value(status), "is_active": is_active})
    return client.patch(f"/point_reward_redemptions/{redemption_id}", payload)


def delete(client: ApiClient, redemption_id: str) -> dict[str, Any]:
    return client.delete(f"/point_reward_redemptions/{redemption_id}")

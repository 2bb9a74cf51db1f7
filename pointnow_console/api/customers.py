# pointnow_console/api/customers.py
# SPDX-License-Identifier: Apache-2.0
"""Customer endpoints: business listings, search, leaderboard and profiles.

Point balances come back in different shapes depending on the endpoint
(``customer_businesses[]``, top-level ``total_points`` or legacy ``points``).
These functions return the payload untouched; resolve balances with
`services.balance` at the point of use.
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_leaderboard_metadata(client: ApiClient, business_id: str) -> dict[str, Any]:
    """Totals (customers, points, visits) for a business leaderboard."""
    return client.get(with_query("/customers/leaderboard/metadata", {"business_id": business_id}))


def get_leaderboard(
    client: ApiClient,
    business_id: str,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    cancel_token: Any = None,
) -> dict[str, Any]:
    """Ranked customers for a business. No date window means all-time."""
    return client.get(
        with_query(
            "/customers/leaderboard",
            {
                "business_id": business_id,
                "start_date": start_date,
                "end_date": end_date,
                "page": page,
                "limit": limit,
            },
        ),
        cancel_token=cancel_token,
    )


def get_position(
    client: ApiClient,
    business_id: str,
    customer_id: str,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    """One customer's rank on a business leaderboard."""
    return client.get(
        with_query(
            "/customers/leaderboard/position",
            {
                "business_id": business_id,
                "customer_id": customer_id,
                "start_date": start_date,
                "end_date": end_date,
            },
        )
    )


def get_all(
    client: ApiClient,
    business_id: str,
    *,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query("/customers", {"business_id": business_id, "page": page, "limit": limit})
    )


def get_by_business(
    client: ApiClient,
    business_id: str,
    *,
    page: int | None = None,
    limit: int | None = None,
    cancel_token: Any = None,
) -> dict[str, Any]:
    """Customers of a business with their per-business ``customer_businesses`` ledger."""
    return client.get(
        with_query(f"/customers/business/{business_id}", {"page": page, "limit": limit}),
        cancel_token=cancel_token,
    )


def search(
    client: ApiClient,
    query: str,
    business_id: str,
    *,
    page: int | None = None,
    limit: int | None = None,
    cancel_token: Any = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/customers/search",
            {"query": query, "business_id": business_id, "page": page, "limit": limit},
        ),
        cancel_token=cancel_token,
    )


def update_by_business(
    client: ApiClient, customer_id: str, business_id: str, payload: dict[str, Any]
) -> dict[str, Any]:
    """PATCH a customer's name/email/phone as seen by one business."""
    return client.patch(f"/customers/{customer_id}/business/{business_id}", payload)


def create_with_user(client: ApiClient, payload: dict[str, Any]) -> dict[str, Any]:
    """Create a user + customer + customer-business link in one call.

    ``payload``: ``{name, email, phone_number, is_active, metadata,
    business: {business_id, staff_id, metadata, is_active, total_points}}``.
    """
    return client.post("/customers/user", payload)


def create_with_user_batch(client: ApiClient, customers: list[dict[str, Any]]) -> dict[str, Any]:
    """Bulk variant used by spreadsheet import (see `services.customer_import`)."""
    return client.post("/customers/user/batch", {"customers": customers})


def get_user_profile(client: ApiClient, user_id: str) -> dict[str, Any]:
    """A user's customer record with every business they have points at."""
    return client.get(f"/customers/user/{user_id}")

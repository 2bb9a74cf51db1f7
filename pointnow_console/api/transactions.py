# pointnow_console/api/transactions.py
# SPDX-License-Identifier: Apache-2.0
"""Point transaction ledger endpoints.

Listings always ask for embedded customer and staff details; the transaction
screens render names, never bare ids.
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_metadata(client: ApiClient, business_id: str) -> dict[str, Any]:
    """Totals: transactions, points added, points subtracted."""
    return client.get(with_query("/point_transactions/metadata", {"business_id": business_id}))


def get_all(
    client: ApiClient,
    business_id: str,
    *,
    page: int | None = None,
    limit: int | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/point_transactions",
            {
                "business_id": business_id,
                "with_customer_detail": True,
                "with_staff_detail": True,
                "page": page,
                "limit": limit,
                "start_date": start_date,
                "end_date": end_date,
            },
        )
    )


def create(
    client: ApiClient,
    business_id: str,
    customer_id: str,
    branch_id: str,
    amount: int,
    employee_id: str,
) -> dict[str, Any]:
    """Record a point movement. Positive ``amount`` earns, negative deducts."""
    return client.post(
        "/point_transactions",
        {
            "business_id": business_id,
            "customer_id": customer_id,
            "branch_id": branch_id,
            "amount": amount,
            "employee_id": employee_id,
        },
    )

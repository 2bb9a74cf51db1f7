# pointnow_console/api/subscription.py
# SPDX-License-Identifier: Apache-2.0
"""Subscription plan endpoints.

Note the collection names differ: products/types live under
``/subscription`` while active subscriptions live under ``/subscriptions``.
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_products(
    client: ApiClient,
    *,
    page: int | None = None,
    limit: int | None = None,
    is_trial: bool | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query("/subscription/products", {"page": page, "limit": limit, "is_trial": is_trial})
    )


def get_type_by_id(client: ApiClient, type_id: str) -> dict[str, Any]:
    return client.get(f"/subscription/types/{type_id}")


def get_active_by_business_id(
    client: ApiClient, business_id: str, provider_name: str = "STRIPE"
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/subscriptions/active/business",
            {"provider_name": provider_name, "business_id": business_id},
        )
    )

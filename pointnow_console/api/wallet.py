# pointnow_console/api/wallet.py
# SPDX-License-Identifier: Apache-2.0
"""SMS credit wallet (usage cache) endpoints.

``with_business`` / ``with_config_type`` change the response shape: the
embedded ``businesses`` / ``config_types`` objects are present only when the
flag was sent as ``true``.
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_usage_caches(
    client: ApiClient,
    business_id: str,
    *,
    page: int | None = None,
    limit: int | None = None,
    config_type_id: str | None = None,
    with_business: bool | None = None,
    with_config_type: bool | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/usage-caches",
            {
                "business_id": business_id,
                "page": page,
                "limit": limit,
                "config_type_id": config_type_id,
                "with_business": with_business,
                "with_config_type": with_config_type,
            },
        )
    )


def current_balance(response: dict[str, Any]) -> float:
    """Balance of the first usage cache in a `get_usage_caches` response (0 when none)."""
    caches = (response.get("data") or {}).get("usage_caches") or []
    if not caches:
        return 0
    return caches[0].get("balance") or 0

# pointnow_console/api/business.py
# SPDX-License-Identifier: Apache-2.0
"""Business directory listing and search."""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_all(
    client: ApiClient,
    *,
    page: int | None = None,
    limit: int | None = None,
    country_code: str | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query("/business", {"page": page, "limit": limit, "country_code": country_code})
    )


def search(
    client: ApiClient,
    query: str | None = None,
    *,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    return client.get(with_query("/business/search", {"query": query, "page": page, "limit": limit}))

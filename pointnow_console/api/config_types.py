# pointnow_console/api/config_types.py
# SPDX-License-Identifier: Apache-2.0
"""Billable rate lookup (e.g. the per-message SMS charge)."""

from __future__ import annotations

from typing import Any

from .client import ApiClient, with_query


def get_all(
    client: ApiClient,
    *,
    name: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    return client.get(with_query("/config-types", {"name": name, "page": page, "limit": limit}))

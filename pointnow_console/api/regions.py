# pointnow_console/api/regions.py
# SPDX-License-Identifier: Apache-2.0
"""Country codes for the business directory filter."""

from __future__ import annotations

from typing import Any

from .client import ApiClient


def get_country_codes(client: ApiClient) -> dict[str, Any]:
    return client.get("/regions/country-code")

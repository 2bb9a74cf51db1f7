# pointnow_console/api/analytics.py
# SPDX-License-Identifier: Apache-2.0
"""
Analytics endpoints for the business dashboard and the customer profile.

Business-side calls are keyed by ``business_id``; customer-side calls by
``customer_id``. Date bounds are ISO dates (``YYYY-MM-DD``) and are omitted
from the query when None.

`fetch_dashboard` joins the three business calls the analytics screen needs.
They are independent, so they run concurrently; if any one fails its error
propagates and the partial results are dropped.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from .client import ApiClient, with_query

log = logging.getLogger(__name__)


def get_metadata(client: ApiClient, business_id: str) -> dict[str, Any]:
    return client.get(
        with_query("/analytics/business/leaderboard/metadata", {"business_id": business_id})
    )


def get_top_customers(client: ApiClient, business_id: str) -> dict[str, Any]:
    return client.get(
        with_query("/analytics/business/leaderboard/customers", {"business_id": business_id})
    )


def get_point_historical_data(
    client: ApiClient,
    business_id: str,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/analytics/business/leaderboard/points/historical-data",
            {"business_id": business_id, "start_date": start_date, "end_date": end_date},
        )
    )


def get_customer_metadata(
    client: ApiClient,
    customer_id: str,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/analytics/leaderboard/customer/metadata",
            {"customer_id": customer_id, "start_date": start_date, "end_date": end_date},
        )
    )


def get_customer_point_historical_data(
    client: ApiClient,
    customer_id: str,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    return client.get(
        with_query(
            "/analytics/leaderboard/customer/points/historical-data",
            {"customer_id": customer_id, "start_date": start_date, "end_date": end_date},
        )
    )


@dataclass(frozen=True)
class Dashboard:
    metadata: dict[str, Any]
    top_customers: dict[str, Any]
    historical: dict[str, Any]


def fetch_dashboard(
    client: ApiClient,
    business_id: str,
    start_date: str | None = None,
    end_date: str | None = None,
) -> Dashboard:
    """Load metadata, top customers and point history together.

    Raises:
        ApiClientError: the first failure among the three calls, in the order
            metadata, top customers, history.
    """
    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="dashboard") as pool:
        meta_f = pool.submit(get_metadata, client, business_id)
        top_f = pool.submit(get_top_customers, client, business_id)
        hist_f = pool.submit(get_point_historical_data, client, business_id, start_date, end_date)
        try:
            return Dashboard(
                metadata=meta_f.result(),
                top_customers=top_f.result(),
                historical=hist_f.result(),
            )
        except Exception:
            log.warning("Dashboard fetch for business %s failed", business_id)
            raise

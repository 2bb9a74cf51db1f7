# tests/test_analytics.py
# SPDX-License-Identifier: Apache-2.0
import threading

import pytest

from pointnow_console.api import analytics
from pointnow_console.api.errors import ApiClientError


class RoutingClient:
    """Answers by path prefix; thread-safe since the dashboard fans out."""

    def __init__(self, routes, fail=None):
        self.routes = routes
        self.fail = fail
        self.seen = []
        self._lock = threading.Lock()

    def get(self, endpoint, **kwargs):
        with self._lock:
            self.seen.append(endpoint)
        path = endpoint.split("?", 1)[0]
        if self.fail and path.endswith(self.fail):
            raise ApiClientError("boom", 500)
        return self.routes[path]


ROUTES = {
    "/analytics/business/leaderboard/metadata": {"data": {"total_customers": 4}},
    "/analytics/business/leaderboard/customers": {"data": {"customers": []}},
    "/analytics/business/leaderboard/points/historical-data": {"data": {"points": []}},
}


def test_dashboard_joins_three_calls():
    client = RoutingClient(ROUTES)
    dash = analytics.fetch_dashboard(client, "biz-1", "2024-01-01", "2024-01-31")
    assert dash.metadata["data"]["total_customers"] == 4
    assert dash.top_customers == ROUTES["/analytics/business/leaderboard/customers"]
    assert len(client.seen) == 3
    assert (
        "/analytics/business/leaderboard/points/historical-data"
        "?business_id=biz-1&start_date=2024-01-01&end_date=2024-01-31"
    ) in client.seen


def test_dashboard_failure_propagates():
    client = RoutingClient(ROUTES, fail="/customers")
    with pytest.raises(ApiClientError, match="boom"):
        analytics.fetch_dashboard(client, "biz-1")


def test_customer_history_query(recorder):
    analytics.get_customer_point_historical_data(recorder, "c-1", end_date="2024-02-01")
    assert recorder.last["endpoint"] == (
        "/analytics/leaderboard/customer/points/historical-data?customer_id=c-1&end_date=2024-02-01"
    )

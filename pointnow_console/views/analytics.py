# pointnow_console/views/analytics.py
# SPDX-License-Identifier: Apache-2.0
"""Business analytics: headline numbers, top customers, point history, and a
per-customer drill-down."""

from __future__ import annotations

import streamlit as st

from pointnow_console.api import analytics
from pointnow_console.api.errors import ApiClientError
from pointnow_console.ui.components import fmt_count, period_picker, show_api_error
from pointnow_console.ui.keys import k

PAGE = "analytics"
SERIES = ["points_issued", "points_redeemed", "net_points"]


def _history_chart(points: list, empty: str) -> None:
    if not points:
        st.info(empty)
        return
    st.line_chart(points, x="date", y=[s for s in SERIES if s in points[0]])


def _customer_drilldown(ctx: dict, top: list, start: str | None, end: str | None) -> None:
    if not top:
        return
    st.subheader("Customer detail")
    names = {c["id"]: c.get("name") or c["id"] for c in top if c.get("id")}
    customer_id = st.selectbox(
        "Customer", list(names), format_func=names.get, key=k(PAGE, "customer")
    )
    try:
        meta = analytics.get_customer_metadata(ctx["client"], customer_id, start, end)
        history = analytics.get_customer_point_historical_data(ctx["client"], customer_id, start, end)
    except ApiClientError as e:
        show_api_error(e, ctx["store"])
        return
    data = meta.get("data") or {}
    c1, c2 = st.columns(2)
    c1.metric("Points", fmt_count(data.get("total_points")))
    c2.metric("Visits", fmt_count(data.get("total_visits")))
    _history_chart(history.get("data") or [], "No activity for this customer in the period.")


def render(ctx: dict) -> None:
    st.header("Analytics")
    start, end = period_picker(PAGE, allow_all_time=False)
    try:
        with st.spinner("Loading analytics…"):
            board = analytics.fetch_dashboard(ctx["client"], ctx["business_id"], start, end)
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load analytics")
        return

    meta = board.metadata.get("data") or {}
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Customers", fmt_count(meta.get("total_customers")))
    c2.metric("Points issued", fmt_count(meta.get("total_points_issued")))
    c3.metric("Points redeemed", fmt_count(meta.get("points_redeemed")))
    c4.metric("Active this month", fmt_count(meta.get("active_this_month")))

    st.subheader("Points over time")
    _history_chart(board.historical.get("data") or [], "No point activity in this period.")

    st.subheader("Top customers")
    top = board.top_customers.get("data") or []
    if top:
        st.table(
            [
                {
                    "Rank": c.get("rank") or i,
                    "Name": c.get("name"),
                    "Points": f"{int(c.get('points') or 0):,}",
                    "Visits": c.get("visits", 0),
                }
                for i, c in enumerate(top, start=1)
            ]
        )
    else:
        st.info("No customers yet.")
    _customer_drilldown(ctx, top, start, end)

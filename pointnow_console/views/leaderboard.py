# pointnow_console/views/leaderboard.py
# SPDX-License-Identifier: Apache-2.0
"""
Public leaderboard for one business.

Operators see their own business; everyone else picks one from the
directory. The period filter maps to the leaderboard's optional
``start_date``/``end_date`` (no window means all-time ranking). Logged-in
customers also see their own position.
"""

from __future__ import annotations

import streamlit as st

from pointnow_console.api import business, customers
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.constants import LEADERBOARD_LIMIT, PAGINATION_LIMIT
from pointnow_console.core.state import LEADERBOARD_PAGE, reset_page_on_change
from pointnow_console.services.balance import (
    SOURCE_LEADERBOARD,
    business_entry,
    to_customer_records,
)
from pointnow_console.ui.components import (
    data_of,
    fmt_count,
    leaderboard_table,
    pager,
    period_picker,
    show_api_error,
)
from pointnow_console.ui.keys import k

PAGE = "leaderboard"


def _pick_business(ctx: dict) -> str | None:
    if ctx["business_id"]:
        return ctx["business_id"]
    try:
        resp = business.get_all(ctx["client"], limit=LEADERBOARD_LIMIT)
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load businesses")
        return None
    rows = data_of(resp, "businesses", [])
    if not rows:
        st.info("No businesses yet.")
        return None
    names = {b["id"]: b.get("name") or b["id"] for b in rows}
    return st.selectbox(
        "Business", list(names), format_func=names.get, key=k(PAGE, "business")
    )


def _metrics(ctx: dict, business_id: str) -> None:
    try:
        resp = customers.get_leaderboard_metadata(ctx["client"], business_id)
    except ApiClientError as e:
        show_api_error(e, ctx["store"])
        return
    meta = data_of(resp, "metadata", {})
    c1, c2, c3 = st.columns(3)
    c1.metric("Customers", fmt_count(meta.get("total_customers")))
    c2.metric("Points issued", fmt_count(meta.get("total_points")))
    c3.metric("Visits", fmt_count(meta.get("total_visits")))


def _my_position(ctx: dict, business_id: str, start: str | None, end: str | None) -> None:
    auth = ctx["auth"]
    if auth is None or not auth.is_customer:
        return
    # Position is keyed by the customer record, found through the profile.
    try:
        profile = customers.get_user_profile(ctx["client"], auth.user.id)
    except ApiClientError as e:
        show_api_error(e, ctx["store"])
        return
    customer_id = next(
        (
            cb.get("customer_id")
            for cb in data_of(profile, "customer_businesses", [])
            if business_entry({"customer_businesses": [cb]}, business_id)
        ),
        None,
    )
    if not customer_id:
        st.caption("You are not on this leaderboard yet.")
        return
    try:
        resp = customers.get_position(
            ctx["client"], business_id, customer_id, start_date=start, end_date=end
        )
    except ApiClientError as e:
        # Customers with no points here have no position; say so instead of erroring.
        if e.status == 404:
            st.caption("You are not on this leaderboard yet.")
            return
        show_api_error(e, ctx["store"])
        return
    position = data_of(resp, "position", {}) or data_of(resp, "customer", {})
    if position.get("rank"):
        st.success(f"Your rank: #{position['rank']} with {fmt_count(position.get('total_points'))} points")


def render(ctx: dict) -> None:
    st.header("Leaderboard")
    business_id = _pick_business(ctx)
    if not business_id:
        return
    start, end = period_picker(PAGE)
    reset_page_on_change(LEADERBOARD_PAGE, k(PAGE, "last_filters"), (business_id, start, end))

    _metrics(ctx, business_id)
    _my_position(ctx, business_id, start, end)

    page = st.session_state[LEADERBOARD_PAGE]
    token = ctx["tracker"].begin(f"{PAGE}:list")
    try:
        resp = customers.get_leaderboard(
            ctx["client"],
            business_id,
            start_date=start,
            end_date=end,
            page=page,
            limit=PAGINATION_LIMIT,
            cancel_token=token,
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load leaderboard")
        return

    records = to_customer_records(data_of(resp, "customers", []), business_id, SOURCE_LEADERBOARD)
    leaderboard_table(records, start_rank=(page - 1) * PAGINATION_LIMIT + 1)
    pager(PAGE, LEADERBOARD_PAGE, data_of(resp, "metadata"))

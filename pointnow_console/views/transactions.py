# pointnow_console/views/transactions.py
# SPDX-License-Identifier: Apache-2.0
"""Point transaction history with customer and staff names."""

from __future__ import annotations

import streamlit as st

from pointnow_console.api import transactions
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.state import TRANSACTIONS_PAGE, reset_page_on_change
from pointnow_console.ui.components import data_of, fmt_count, pager, period_picker, show_api_error
from pointnow_console.ui.keys import k

PAGE = "transactions"


def transaction_row(tx: dict) -> dict:
    """Flatten one transaction (with embedded details) for display."""
    customer = ((tx.get("customer_business") or {}).get("customer")) or {}
    staff_user = ((tx.get("staff") or {}).get("user")) or {}
    amount = int(tx.get("amount") or 0)
    return {
        "Date": (tx.get("transaction_at") or tx.get("created_at") or "")[:16].replace("T", " "),
        "Customer": customer.get("name") or tx.get("customer_name") or "—",
        "Phone": customer.get("phone_number") or tx.get("customer_phone") or "",
        "Points": f"{amount:+,}",
        "Type": tx.get("type", ""),
        "Staff": staff_user.get("name") or tx.get("staff_member") or "—",
    }


def render(ctx: dict) -> None:
    st.header("Transactions")
    client, business_id = ctx["client"], ctx["business_id"]

    try:
        meta = data_of(transactions.get_metadata(client, business_id), "metadata", {})
    except ApiClientError as e:
        show_api_error(e, ctx["store"])
        meta = {}
    c1, c2, c3 = st.columns(3)
    c1.metric("Transactions", fmt_count(meta.get("total_transactions")))
    c2.metric("Points added", fmt_count(meta.get("total_points_added")))
    c3.metric("Points deducted", fmt_count(meta.get("total_points_subtracted")))

    start, end = period_picker(PAGE)
    reset_page_on_change(TRANSACTIONS_PAGE, k(PAGE, "last_period"), (start, end))
    try:
        resp = transactions.get_all(
            client,
            business_id,
            page=st.session_state[TRANSACTIONS_PAGE],
            limit=ctx["settings"].PAGE_LIMIT,
            start_date=start,
            end_date=end,
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load transactions")
        return
    rows = [transaction_row(tx) for tx in data_of(resp, "point_transactions", [])]
    if not rows:
        st.info("No transactions in this period.")
        return
    st.dataframe(rows, hide_index=True, use_container_width=True)
    pager(PAGE, TRANSACTIONS_PAGE, data_of(resp, "metadata"))

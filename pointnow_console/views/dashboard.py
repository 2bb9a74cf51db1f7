# pointnow_console/views/dashboard.py
# SPDX-License-Identifier: Apache-2.0
"""
Counter dashboard: find or add a customer, then add or deduct points, or
redeem a reward for them.

The selected customer lives in ``st.session_state`` as a `CustomerRecord`.
After a successful transaction its balance is updated locally with the
amount the backend accepted, so the operator sees the new total without
another search. Deductions never take a balance below zero.
"""

from __future__ import annotations

import dataclasses
import logging

import streamlit as st

from pointnow_console.api import customers, redemptions, rewards, transactions
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.state import SELECTED_CUSTOMER
from pointnow_console.services.balance import (
    SOURCE_SEARCH,
    CustomerRecord,
    can_redeem,
    point_delta,
    to_customer_record,
    to_customer_records,
)
from pointnow_console.services.phone import convert_phone_number
from pointnow_console.services.validation import (
    ValidationError,
    validate_email,
    validate_points_input,
)
from pointnow_console.ui.components import data_of, show_api_error
from pointnow_console.ui.counter import Counter, counter_picker
from pointnow_console.ui.keys import k
from pointnow_console.ui.layout import stack_or_columns_spec, view_header
from pointnow_console.views.rewards import redemption_row

log = logging.getLogger(__name__)

PAGE = "dashboard"
SEARCH_LIMIT = 10
HISTORY_LIMIT = 5


def _select(record: CustomerRecord | None) -> None:
    st.session_state[SELECTED_CUSTOMER] = record
    st.session_state.pop(k(PAGE, "points"), None)


def _search(ctx: dict) -> None:
    query = st.text_input("Search by name, phone or email", key=k(PAGE, "query")).strip()
    if not query:
        return
    tracker = ctx["tracker"]
    token = tracker.begin(f"{PAGE}:search")
    try:
        resp = customers.search(
            ctx["client"], query, ctx["business_id"], limit=SEARCH_LIMIT, cancel_token=token
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"])
        return
    if not tracker.is_current(f"{PAGE}:search", token):
        return

    found = to_customer_records(data_of(resp, "customers", []), ctx["business_id"], SOURCE_SEARCH)
    if not found:
        st.info("No matching customers.")
    for record in found:
        label = f"{record.name} · {record.phone_number or record.email} · {record.points:,} pts"
        if st.button(label, key=k(PAGE, f"pick_{record.id}"), use_container_width=True):
            _select(record)
            st.rerun()


def _new_customer(ctx: dict, counter: Counter) -> None:
    with st.expander("New customer"):
        with st.form(k(PAGE, "new_customer")):
            name = st.text_input("Name")
            phone = st.text_input("Phone number")
            email = st.text_input("Email")
            submitted = st.form_submit_button("Add customer")
        if not submitted:
            return
        if not name.strip() or not phone.strip():
            st.error("Name and phone number are required")
            return
        try:
            resp = customers.create_with_user(
                ctx["client"],
                {
                    "name": name.strip(),
                    "email": validate_email(email),
                    "phone_number": convert_phone_number(phone),
                    "is_active": True,
                    "metadata": {},
                    "business": {
                        "business_id": ctx["business_id"],
                        "staff_id": counter.employee_id,
                        "metadata": {},
                        "is_active": True,
                        "total_points": 0,
                    },
                },
            )
        except ValidationError as e:
            st.error(str(e))
            return
        except ApiClientError as e:
            show_api_error(e, ctx["store"], action="Could not add customer")
            return
        created = data_of(resp, "customer", {}) or {}
        _select(to_customer_record(created, ctx["business_id"], SOURCE_SEARCH))
        st.rerun()


def _points(ctx: dict, record: CustomerRecord, counter: Counter) -> None:
    st.subheader("Points")
    raw = st.text_input("Points", max_chars=10, key=k(PAGE, "points"))
    add_col, deduct_col = st.columns(2)
    add = add_col.button("➕ Add points", use_container_width=True, key=k(PAGE, "add"))
    deduct = deduct_col.button("➖ Deduct points", use_container_width=True, key=k(PAGE, "deduct"))
    if not (add or deduct):
        return
    try:
        points = validate_points_input(raw)
    except ValidationError as e:
        st.error(str(e))
        return
    amount = point_delta(record.points, points, subtract=deduct)
    if amount == 0:
        st.warning(f"{record.name} has no points to deduct.")
        return
    try:
        transactions.create(
            ctx["client"],
            ctx["business_id"],
            record.id,
            counter.branch_id,
            amount,
            counter.employee_id,
        )
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Transaction failed")
        return
    _select(dataclasses.replace(record, points=record.points + amount))
    verb = "Added" if amount > 0 else "Deducted"
    st.toast(f"{verb} {abs(amount):,} points for {record.name}")
    st.rerun()


def _redeem(ctx: dict, record: CustomerRecord, counter: Counter) -> None:
    st.subheader("Redeem a reward")
    try:
        resp = rewards.get_by_business(ctx["client"], ctx["business_id"], is_active="true")
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load rewards")
        return
    catalogue = data_of(resp, "point_rewards", [])
    if not catalogue:
        st.caption("No active rewards. Create one on the Rewards screen.")
        return
    for reward in catalogue:
        cost = int(reward.get("points_cost") or 0)
        cols = st.columns([3, 1])
        cols[0].markdown(f"**{reward.get('name')}** · {cost:,} pts")
        if cols[1].button(
            "Redeem",
            key=k(PAGE, f"redeem_{reward['id']}"),
            disabled=not can_redeem(record, ctx["business_id"], reward),
        ):
            try:
                redemptions.create_with_customer_id(
                    ctx["client"], record.id, reward["id"], counter.employee_id, counter.branch_id
                )
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Redemption failed")
                return
            _select(dataclasses.replace(record, points=max(record.points - cost, 0)))
            st.toast(f"Redeemed {reward.get('name')} for {record.name}")
            st.rerun()


def _history(ctx: dict, record: CustomerRecord) -> None:
    try:
        resp = redemptions.get_by_customer(
            ctx["client"],
            record.id,
            business_id=ctx["business_id"],
            with_reward_detail="true",
            limit=HISTORY_LIMIT,
        )
    except ApiClientError as e:
        # The counter keeps working without the history panel.
        log.warning("Redemption history for %s unavailable: %s", record.id, e.message)
        return
    rows = [redemption_row(r) for r in data_of(resp, "point_reward_redemptions", [])]
    if rows:
        st.caption("Recent redemptions")
        st.dataframe(rows, hide_index=True, use_container_width=True)


def render(ctx: dict) -> None:
    view_header("Dashboard", "Manage customer points")
    counter = counter_picker(ctx, PAGE)
    if counter is None:
        return

    record: CustomerRecord | None = st.session_state.get(SELECTED_CUSTOMER)
    stacked = st.toggle("Tablet layout", key=k(PAGE, "stacked"), help="Stack the panels on narrow counter screens")
    left, right = stack_or_columns_spec(2, stacked=stacked)
    with left:
        if record is None:
            _search(ctx)
            _new_customer(ctx, counter)
        else:
            with st.container(border=True):
                st.markdown(f"### {record.name}")
                st.caption(record.phone_number or record.email)
                st.metric("Balance", f"{record.points:,} pts")
            if st.button("Clear customer", key=k(PAGE, "clear")):
                _select(None)
                st.rerun()
    with right:
        if record is None:
            st.info("Select or add a customer to record points.")
            return
        _points(ctx, record, counter)
        _redeem(ctx, record, counter)
        _history(ctx, record)

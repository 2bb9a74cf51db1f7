# pointnow_console/views/profile.py
# SPDX-License-Identifier: Apache-2.0
"""
Customer profile: totals across businesses, one card per business with the
customer's balance and rank there, plus account details they can edit.

Rank lookups depend on the profile response (they need its business ids), so
they run after it, one per business.
"""

from __future__ import annotations

import logging

import streamlit as st

from pointnow_console.api import customers, users
from pointnow_console.api.errors import ApiClientError
from pointnow_console.services.balance import resolve_last_visit, resolve_points, resolve_visits
from pointnow_console.services.phone import convert_phone_number
from pointnow_console.ui.components import data_of, fmt_count, show_api_error
from pointnow_console.ui.keys import k

log = logging.getLogger(__name__)

PAGE = "profile"


def _rank(ctx: dict, business_id: str, customer_id: str) -> int | None:
    try:
        resp = customers.get_position(ctx["client"], business_id, customer_id)
    except ApiClientError as e:
        log.warning("Position lookup for business %s failed: %s", business_id, e.message)
        return None
    position = data_of(resp, "position", {}) or data_of(resp, "customer", {})
    return position.get("rank")


def _account_form(ctx: dict, user: dict) -> None:
    with st.expander("Account details"):
        with st.form(k(PAGE, "account")):
            name = st.text_input("Name", value=user.get("name") or "")
            phone = st.text_input("Phone number", value=user.get("phone_number") or "")
            saved = st.form_submit_button("Save")
        if not saved:
            return
        try:
            users.update_user(
                ctx["client"],
                ctx["auth"].user.id,
                name=name.strip(),
                phone_number=convert_phone_number(phone),
            )
        except ApiClientError as e:
            show_api_error(e, ctx["store"], action="Could not save")
            return
        st.success("Saved. Changes show up after your next login.")


def render(ctx: dict) -> None:
    auth = ctx["auth"]
    st.header("My profile")
    try:
        resp = customers.get_user_profile(ctx["client"], auth.user.id)
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Failed to load profile data")
        return

    user = data_of(resp, "user", {}) or {}
    links = data_of(resp, "customer_businesses", []) or []
    meta = data_of(resp, "metadata", {}) or {}

    st.subheader(user.get("name") or auth.user.name)
    c1, c2, c3 = st.columns(3)
    c1.metric("Total points", fmt_count(meta.get("total_points")))
    total_visits = meta.get("total_visits") or sum(int(cb.get("total_visits") or 0) for cb in links)
    c2.metric("Total visits", fmt_count(total_visits))
    c3.metric("Businesses", meta.get("total_businesses") or len(links))

    if not links:
        st.info("You have not collected points anywhere yet.")
    # A one-entry view of each link lets the shared resolvers read it.
    for cb in links:
        biz = cb.get("business") or {}
        business_id = biz.get("id") or cb.get("business_id")
        view = {"customer_businesses": [cb]}
        with st.container(border=True):
            st.markdown(f"**{biz.get('name', 'Business')}**")
            a, b, c = st.columns(3)
            a.metric("Points", f"{resolve_points(view, business_id):,}")
            b.metric("Visits", resolve_visits(view, business_id))
            customer_id = cb.get("customer_id")
            rank = _rank(ctx, business_id, customer_id) if business_id and customer_id else None
            c.metric("Rank", f"#{rank}" if rank else "—")
            last = resolve_last_visit(view, business_id)
            if last:
                st.caption(f"Last visit: {last[:10]}")

    _account_form(ctx, user)

# pointnow_console/views/landing.py
# SPDX-License-Identifier: Apache-2.0
"""Home screen: what PointNow is, and a directory of participating businesses."""

from __future__ import annotations

import streamlit as st

from pointnow_console.api import business, regions
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.constants import PAGINATION_LIMIT
from pointnow_console.ui.components import data_of, show_api_error
from pointnow_console.ui.keys import k

PITCH = """
**Collect points everywhere you eat.** PointNow keeps one loyalty balance per
business: staff add points at the counter, you redeem them for vouchers,
cashback and bonuses, and every business keeps a public leaderboard.

- Customers: sign up with your phone number, no app download needed.
- Businesses: register, add branches and staff, and start rewarding regulars.
"""


def _country_options(client) -> dict[str, str | None]:
    options: dict[str, str | None] = {"All countries": None}
    try:
        resp = regions.get_country_codes(client)
    except ApiClientError:
        # The filter is optional; the directory still works unfiltered.
        return options
    for region in data_of(resp, "regions", []):
        options[f"{region.get('name')} (+{region.get('country_code')})"] = region.get("country_code")
    return options


def render(ctx: dict) -> None:
    st.header("Welcome to PointNow")
    st.markdown(PITCH)

    st.subheader("Participating businesses")
    client = ctx["client"]
    left, right = st.columns([2, 1])
    with left:
        query = st.text_input("Search businesses", key=k("landing", "query")).strip()
    with right:
        options = _country_options(client)
        label = st.selectbox("Country", list(options), key=k("landing", "country"))

    try:
        if query:
            resp = business.search(client, query, limit=PAGINATION_LIMIT)
        else:
            resp = business.get_all(client, limit=PAGINATION_LIMIT, country_code=options[label])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load businesses")
        return

    rows = data_of(resp, "businesses", [])
    if not rows:
        st.info("No businesses found.")
        return
    for b in rows:
        with st.container(border=True):
            st.markdown(f"**{b.get('name', '—')}**")
            if b.get("description"):
                st.write(b["description"])
            if b.get("address"):
                st.caption(b["address"])

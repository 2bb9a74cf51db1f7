# pointnow_console/views/message_blasting.py
# SPDX-License-Identifier: Apache-2.0
"""
SMS blasts to selected customers, paid from the business's SMS wallet.

Selections are kept by customer id in ``st.session_state`` so they survive
paging and searching. The cost is one ``SMS`` config-type charge per selected
customer who has a phone number; sending is refused when the wallet balance
does not cover it.
"""

from __future__ import annotations

import logging

import streamlit as st

from pointnow_console.api import blast, config_types, customers, wallet
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.constants import SMS_CONFIG_TYPE
from pointnow_console.core.state import BLAST_PAGE, BLAST_SELECTION, reset_page_on_change
from pointnow_console.services.balance import (
    SOURCE_BUSINESS_DETAIL,
    SOURCE_SEARCH,
    to_customer_records,
)
from pointnow_console.services.validation import ValidationError, blast_cost, validate_blast
from pointnow_console.ui.components import data_of, pager, show_api_error, wallet_metric
from pointnow_console.ui.keys import k

log = logging.getLogger(__name__)

PAGE = "blast"


def _wallet_and_rate(ctx: dict) -> tuple[float, dict | None] | None:
    client, business_id = ctx["client"], ctx["business_id"]
    try:
        caches = wallet.get_usage_caches(client, business_id, with_config_type=True)
        rates = config_types.get_all(client, name=SMS_CONFIG_TYPE)
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load wallet")
        return None
    rate_rows = data_of(rates, "config_types", [])
    return wallet.current_balance(caches), (rate_rows[0] if rate_rows else None)


def _variables(ctx: dict) -> None:
    try:
        resp = blast.get_variables(ctx["client"])
    except ApiClientError as e:
        st.caption(f"Failed to load variables: {e.message}")
        return
    rows = data_of(resp, "variables", [])
    if rows:
        with st.expander("Message variables"):
            for v in rows:
                st.markdown(f"`{{{v.get('variable')}}}` {v.get('description', '')}")


def _clear_selection() -> None:
    st.session_state[BLAST_SELECTION] = {}
    prefix = k(PAGE, "sel_")
    for key in [key for key in st.session_state if str(key).startswith(prefix)]:
        del st.session_state[key]


def _recipients(ctx: dict) -> None:
    selection: dict = st.session_state[BLAST_SELECTION]
    query = st.text_input("Search customers", key=k(PAGE, "query")).strip()
    reset_page_on_change(BLAST_PAGE, k(PAGE, "last_query"), query)
    page = st.session_state[BLAST_PAGE]
    limit = ctx["settings"].PAGE_LIMIT
    token = ctx["tracker"].begin(f"{PAGE}:list")
    try:
        if query:
            resp = customers.search(
                ctx["client"], query, ctx["business_id"], page=page, limit=limit, cancel_token=token
            )
            source = SOURCE_SEARCH
        else:
            resp = customers.get_by_business(
                ctx["client"], ctx["business_id"], page=page, limit=limit, cancel_token=token
            )
            source = SOURCE_BUSINESS_DETAIL
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load customers")
        return

    records = to_customer_records(data_of(resp, "customers", []), ctx["business_id"], source)
    # Checkbox keys must be set before the checkboxes render in this run.
    if records and st.button("Select all on this page", key=k(PAGE, "select_all")):
        for r in records:
            st.session_state[k(PAGE, f"sel_{r.id}")] = True
    for r in records:
        label = f"{r.name} · {r.phone_number or 'no phone'} · {r.points:,} pts"
        key = k(PAGE, f"sel_{r.id}")
        st.session_state.setdefault(key, r.id in selection)
        if st.checkbox(label, key=key):
            selection[r.id] = {"id": r.id, "name": r.name, "phone_number": r.phone_number}
        else:
            selection.pop(r.id, None)
    pager(PAGE, BLAST_PAGE, data_of(resp, "metadata"))


def render(ctx: dict) -> None:
    st.header("Message blasting")
    loaded = _wallet_and_rate(ctx)
    if loaded is None:
        return
    balance, rate = loaded
    wallet_metric(balance)
    if rate is None:
        st.warning("SMS pricing is unavailable; sending is disabled.")

    left, right = st.columns([3, 2])
    with left:
        _recipients(ctx)
    with right:
        _variables(ctx)
        message = st.text_area(
            "Message",
            key=k(PAGE, "message"),
            placeholder="Hello {name}, you have {total_points} points!",
        )
        selected = list(st.session_state[BLAST_SELECTION].values())
        quote = blast_cost(selected, rate, balance)
        st.caption(
            f"{len(selected)} selected · {quote.recipients} with a phone number · "
            f"cost {quote.total_cost:,.2f}"
        )
        if not quote.sufficient:
            st.caption("Insufficient balance. Top up on the Billing screen.")

        if st.button("Send", type="primary", key=k(PAGE, "send"), disabled=rate is None):
            try:
                phones = validate_blast(message, selected, rate, balance)
                resp = blast.send_otp(ctx["client"], message.strip(), phones, ctx["business_id"])
            except ValidationError as e:
                st.error(str(e))
                return
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Failed to send message")
                return
            usage_cache, _ = blast.blast_result(resp)
            log.info("Blast sent to %d recipient(s)", len(phones))
            _clear_selection()
            st.session_state.pop(k(PAGE, "message"), None)
            plural = "" if len(phones) == 1 else "s"
            st.toast(f"Message sent to {len(phones)} customer{plural}.")
            if "balance" in usage_cache:
                st.toast(f"New balance: {usage_cache['balance']:,.2f}")
            st.rerun()

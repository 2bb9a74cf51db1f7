# pointnow_console/ui/components.py
# SPDX-License-Identifier: Apache-2.0
"""Reusable Streamlit UI components.

  • show_api_error():     surface an `ApiClientError` (and expire the session on 401)
  • pager():              previous/next controls driven by pagination metadata
  • customer_table():     customers as a dataframe
  • leaderboard_table():  ranked customers with points and visits
  • wallet_metric():      SMS credit balance
  • fmt_count():          backend counters, null-safe
  • data_of():            unwrap the backend's ``{"data": {...}}`` envelope
  • period_picker():      date window for leaderboards, analytics and transactions
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from typing import Any

import streamlit as st

from pointnow_console.api.errors import ApiClientError, RequestCancelled
from pointnow_console.core.constants import has_next, has_previous, pagination_label
from pointnow_console.core.session import SessionStore
from pointnow_console.core.state import reset_business_state
from pointnow_console.services.balance import CustomerRecord

from .keys import k

log = logging.getLogger(__name__)

SESSION_EXPIRED = "Your session has expired. Please log in again."


def show_api_error(
    e: ApiClientError,
    store: SessionStore | None = None,
    *,
    action: str | None = None,
) -> None:
    """Render a backend failure inline.

    The server's message is shown verbatim; field errors are listed under it.
    A 401 while logged in ends the session, since no token refresh exists.
    Cancelled requests belong to a superseded screen and render nothing.
    """
    if isinstance(e, RequestCancelled):
        return
    if e.status == 401 and store is not None and store.is_authenticated:
        log.info("Access token rejected; clearing session")
        store.clear_auth()
        reset_business_state()
        st.error(SESSION_EXPIRED)
        return

    message = e.message or "An error occurred. Please try again."
    st.error(f"{action}: {message}" if action else message)
    for field in e.errors or {}:
        for m in e.field_errors(field):
            st.caption(f"• {field}: {m}")


def pager(page: str, state_key: str, metadata: Mapping[str, Any] | None) -> None:
    """Previous/next buttons that step ``st.session_state[state_key]``."""
    if not metadata:
        return
    prev_col, label_col, next_col = st.columns([1, 3, 1])
    with prev_col:
        if st.button("← Prev", key=k(page, "prev"), disabled=not has_previous(metadata)):
            st.session_state[state_key] = max(1, st.session_state.get(state_key, 1) - 1)
            st.rerun()
    with label_col:
        st.caption(pagination_label(dict(metadata)))
    with next_col:
        if st.button("Next →", key=k(page, "next"), disabled=not has_next(metadata)):
            st.session_state[state_key] = st.session_state.get(state_key, 1) + 1
            st.rerun()


def customer_table(records: Sequence[CustomerRecord], empty: str = "No customers found.") -> None:
    if not records:
        st.info(empty)
        return
    st.dataframe([r.to_row() for r in records], use_container_width=True, hide_index=True)


def leaderboard_table(records: Iterable[CustomerRecord], start_rank: int = 1) -> None:
    """Ranked table; `start_rank` offsets ranks on later pages."""
    rows = [
        {"Rank": i, "Name": r.name or "—", "Points": f"{r.points:,}", "Visits": r.visits}
        for i, r in enumerate(records, start=start_rank)
    ]
    if not rows:
        st.info("No customers on the leaderboard yet.")
        return
    st.table(rows)


def wallet_metric(balance: float, label: str = "SMS credit balance") -> None:
    st.metric(label, f"{balance:,.2f}")


def fmt_count(value: Any) -> str:
    """Thousands-separated whole number; missing, null or non-numeric shows as 0."""
    try:
        return f"{int(value or 0):,}"
    except (TypeError, ValueError):
        return "0"


def data_of(response: Mapping[str, Any] | None, key: str, default: Any = None) -> Any:
    """``response["data"][key]`` for the backend's envelope, or `default`."""
    data = (response or {}).get("data")
    if not isinstance(data, Mapping):
        return default
    value = data.get(key)
    return default if value is None else value


PERIODS = ("All time", "Last 7 days", "Last 30 days", "This month", "Custom")


def period_bounds(period: str, today: date | None = None) -> tuple[str | None, str | None]:
    """ISO ``(start_date, end_date)`` for a preset period; ``(None, None)`` is all time.

    Examples:
        >>> period_bounds("This month", date(2024, 3, 15))
        ('2024-03-01', '2024-03-15')
    """
    today = today or date.today()
    if period == "Last 7 days":
        return (today - timedelta(days=6)).isoformat(), today.isoformat()
    if period == "Last 30 days":
        return (today - timedelta(days=29)).isoformat(), today.isoformat()
    if period == "This month":
        return today.replace(day=1).isoformat(), today.isoformat()
    return None, None


def period_picker(page: str, *, allow_all_time: bool = True) -> tuple[str | None, str | None]:
    """Period selector; returns ISO date bounds for the API date filters."""
    options = PERIODS if allow_all_time else PERIODS[1:]
    period = st.selectbox("Period", options, key=k(page, "period"))
    if period != "Custom":
        return period_bounds(period)
    today = date.today()
    picked = st.date_input(
        "Date range", value=(today - timedelta(days=29), today), key=k(page, "range")
    )
    if isinstance(picked, (tuple, list)) and len(picked) == 2:
        return picked[0].isoformat(), picked[1].isoformat()
    # Only one end picked so far.
    return None, None

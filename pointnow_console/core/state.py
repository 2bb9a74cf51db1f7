# pointnow_console/core/state.py
# SPDX-License-Identifier: Apache-2.0
"""
Session-scoped UI state for the Streamlit console.

Centralizes the default values expected in `st.session_state` and a single
idempotent entry point to create them. Only screen state lives here (selected
customer, page numbers, in-progress selections); who is logged in belongs to
the per-session `SessionStore` (`core.clients`), never to these keys, so
`reset_business_state()` cannot log anyone out.

Usage
-----
Call `ensure_defaults()` once per rerun, before views read session state
(the sidebar does this).
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, MutableMapping
from typing import Any, Final

import streamlit as st

from .cancel import RequestTracker

# Key names, shared by the views that read and write them.
NAV_VIEW: Final[str] = "NAV_VIEW"
SELECTED_CUSTOMER: Final[str] = "SELECTED_CUSTOMER"
CUSTOMERS_PAGE: Final[str] = "CUSTOMERS_PAGE"
LEADERBOARD_PAGE: Final[str] = "LEADERBOARD_PAGE"
TRANSACTIONS_PAGE: Final[str] = "TRANSACTIONS_PAGE"
REWARDS_PAGE: Final[str] = "REWARDS_PAGE"
BLAST_PAGE: Final[str] = "BLAST_PAGE"
BLAST_SELECTION: Final[str] = "BLAST_SELECTION"
PENDING_OTP: Final[str] = "PENDING_OTP"
PENDING_IMPORT: Final[str] = "PENDING_IMPORT"
# Holds a RequestTracker; created lazily by get_tracker(), not in DEFAULTS.
REQUEST_TRACKER: Final[str] = "REQUEST_TRACKER"

DEFAULTS: Final[Mapping[str, Any]] = {
    # Screen picked in the sidebar navigation.
    NAV_VIEW: "Home",
    # Customer the point-entry dashboard is working on (a CustomerRecord).
    SELECTED_CUSTOMER: None,
    # 1-based page numbers for paginated lists.
    CUSTOMERS_PAGE: 1,
    LEADERBOARD_PAGE: 1,
    TRANSACTIONS_PAGE: 1,
    REWARDS_PAGE: 1,
    BLAST_PAGE: 1,
    # Blast recipients keyed by customer id; survives paging.
    BLAST_SELECTION: {},
    # Phone awaiting an OTP: {"phone_number": ..., "flow": "login"|"register"}.
    PENDING_OTP: None,
    # Parsed customer file waiting for confirmation (CustomerImportResult).
    PENDING_IMPORT: None,
}

__all__ = [
    "DEFAULTS",
    "ensure_defaults",
    "get_tracker",
    "reset_business_state",
    "reset_page_on_change",
]


def ensure_defaults() -> None:
    """Set every key in :data:`DEFAULTS` that is not already present."""
    for key, default_value in DEFAULTS.items():
        # Copy mutable defaults so reruns never share one dict.
        st.session_state.setdefault(key, copy.deepcopy(default_value))


def reset_business_state() -> None:
    """Drop screen state tied to the current operator (on logout or login)."""
    for key, default_value in DEFAULTS.items():
        if key != NAV_VIEW:
            st.session_state[key] = copy.deepcopy(default_value)


def get_tracker() -> RequestTracker:
    """This browser session's `RequestTracker` (one per session, not per process)."""
    tracker = st.session_state.get(REQUEST_TRACKER)
    if tracker is None:
        tracker = st.session_state[REQUEST_TRACKER] = RequestTracker()
    return tracker


def reset_page_on_change(
    page_key: str,
    marker_key: str,
    filters: Any,
    state: MutableMapping[str, Any] | None = None,
) -> None:
    """Send ``page_key`` back to page 1 when `filters` differ from the last rerun.

    `filters` is any comparable value (a query string, a tuple of bounds);
    it is remembered under `marker_key`.
    """
    state = st.session_state if state is None else state
    if state.get(marker_key) != filters:
        state[marker_key] = filters
        state[page_key] = 1

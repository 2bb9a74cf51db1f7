# pointnow_console/ui/sidebar.py
# SPDX-License-Identifier: Apache-2.0
"""Sidebar composition: who is logged in, which business, and navigation.

`render_sidebar_and_status()` is the single entry point the app calls on
every rerun. It ensures session defaults exist, shows the current operator
(or a logged-out notice), offers logout, and lets the user pick a screen from
those their role may open.

Returns
-------
A context dictionary passed to every view's ``render(ctx)``:

- ``settings``: the `Settings` instance.
- ``store``:    the `SessionStore` (read `store.user` for the `AuthUser`).
- ``client``:   the `ApiClient` bound to that store.
- ``tracker``:  the `RequestTracker` for cancellable lookups.
- ``auth``:     the `AuthUser` or None.
- ``business_id``: the operator's business, or None.
- ``view``:     the screen name picked in the navigation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Final

import streamlit as st

from pointnow_console.core.clients import session_services
from pointnow_console.core.config import settings
from pointnow_console.core.models import AuthUser
from pointnow_console.core.state import (
    NAV_VIEW,
    ensure_defaults,
    get_tracker,
    reset_business_state,
)

PUBLIC_VIEWS: Final[tuple[str, ...]] = ("Home", "Sign in", "Leaderboard")
CUSTOMER_VIEWS: Final[tuple[str, ...]] = ("Home", "Profile", "Leaderboard")
OPERATOR_VIEWS: Final[tuple[str, ...]] = (
    "Dashboard",
    "Customers",
    "Message blasting",
    "Analytics",
    "Rewards",
    "Transactions",
    "Branches",
    "Staff",
    "Billing",
    "Leaderboard",
)
# Staff run the counter; business administration is for admins.
ADMIN_ONLY_VIEWS: Final[frozenset[str]] = frozenset({"Staff", "Branches", "Billing"})


def available_views(auth: AuthUser | None) -> Sequence[str]:
    """Screens the current user may open, in navigation order."""
    if auth is None:
        return PUBLIC_VIEWS
    if auth.can_manage_business:
        if auth.is_admin:
            return OPERATOR_VIEWS
        return tuple(v for v in OPERATOR_VIEWS if v not in ADMIN_ONLY_VIEWS)
    return CUSTOMER_VIEWS


def _status(auth: AuthUser | None) -> None:
    if auth is None:
        st.sidebar.info("Not signed in")
        return
    user = auth.user
    st.sidebar.markdown(f"**{user.name or user.email or user.phone_number}**")
    roles = ", ".join(auth.roles) or "—"
    st.sidebar.caption(f"Roles: {roles}")
    if auth.business_id:
        st.sidebar.caption(f"Business: `{auth.business_id}`")


def render_sidebar_and_status() -> dict[str, Any]:
    ensure_defaults()
    store, client = session_services(st.session_state)
    tracker = get_tracker()

    st.sidebar.header("Session")
    auth, _ = store.snapshot()
    _status(auth)

    if auth is not None and st.sidebar.button("Log out", use_container_width=True):
        tracker.cancel_all()
        store.clear_auth()
        reset_business_state()
        st.session_state[NAV_VIEW] = PUBLIC_VIEWS[0]
        st.rerun()

    st.sidebar.markdown("---")
    views = list(available_views(auth))
    current = st.session_state.get(NAV_VIEW)
    if current not in views:
        current = views[0]
    view = st.sidebar.radio("Go to", views, index=views.index(current))
    st.session_state[NAV_VIEW] = view

    if not settings.API_URL:
        st.sidebar.warning("POINTNOW_API_URL is not set.")

    return dict(
        settings=settings,
        store=store,
        client=client,
        tracker=tracker,
        auth=auth,
        business_id=auth.business_id if auth else None,
        view=view,
    )

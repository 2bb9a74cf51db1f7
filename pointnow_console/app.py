# pointnow_console/app.py
# SPDX-License-Identifier: Apache-2.0
"""PointNow — loyalty console (Streamlit).

Entry point: ``streamlit run pointnow_console/app.py``.

Wires up logging, page chrome, the sidebar (session + navigation) and
dispatches to one view module per screen. Which screens are offered depends on
the logged-in role (see `ui.sidebar.available_views`):

  logged out   Home, Sign in, Leaderboard
  customer     Home, Profile, Leaderboard
  operator     Dashboard, Customers, Message blasting, Analytics, Rewards,
               Transactions, Branches*, Staff*, Billing*, Leaderboard
               (* admins only)

Keep this file thin: views render, `api/` talks to the backend, `services/`
holds the logic that needs neither.
"""

from __future__ import annotations

# ────────────────────── sys.path bootstrap for local packages ─────────────────
# `streamlit run` puts only this file's directory on sys.path; add the project
# root so `pointnow_console.*` imports work without `pip install -e .`.
import pathlib
import sys

ROOT_DIR = pathlib.Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))
# ──────────────────────────────────────────────────────────────────────────────

from collections.abc import Callable
from typing import Any, Final

from pointnow_console.core.config import settings
from pointnow_console.core.logs import configure_logging
from pointnow_console.ui.layout import configure_page
from pointnow_console.ui.sidebar import render_sidebar_and_status
from pointnow_console.views import (
    analytics,
    auth,
    billing,
    branches,
    customers,
    dashboard,
    landing,
    leaderboard,
    message_blasting,
    profile,
    rewards,
    staff,
    transactions,
)

configure_logging(settings.LOG_LEVEL)

# ─────────────────────────────── Page chrome ──────────────────────────────────
configure_page(title="PointNow — Loyalty Console")

ctx: dict[str, Any] = render_sidebar_and_status()

# ─────────────────────────────── View dispatch ────────────────────────────────
VIEWS: Final[dict[str, Callable[[dict], None]]] = {
    "Home": landing.render,
    "Sign in": auth.render,
    "Leaderboard": leaderboard.render,
    "Profile": profile.render,
    "Dashboard": dashboard.render,
    "Customers": customers.render,
    "Message blasting": message_blasting.render,
    "Analytics": analytics.render,
    "Rewards": rewards.render,
    "Transactions": transactions.render,
    "Branches": branches.render,
    "Staff": staff.render,
    "Billing": billing.render,
}

VIEWS[ctx["view"]](ctx)

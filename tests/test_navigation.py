# tests/test_navigation.py
# SPDX-License-Identifier: Apache-2.0
"""Role-filtered navigation, pagination labels and display helpers."""

from datetime import date

from pointnow_console.core.constants import has_next, has_previous, pagination_label
from pointnow_console.core.models import AuthUser, BackendTokens, User
from pointnow_console.core.state import LEADERBOARD_PAGE, reset_page_on_change
from pointnow_console.ui.components import data_of, fmt_count, period_bounds
from pointnow_console.ui.sidebar import (
    ADMIN_ONLY_VIEWS,
    CUSTOMER_VIEWS,
    OPERATOR_VIEWS,
    PUBLIC_VIEWS,
    available_views,
)
from pointnow_console.views.rewards import redemption_row
from pointnow_console.views.transactions import transaction_row

from .conftest import login_payload

TOKENS = BackendTokens(access_token="t")


def _auth(role, business_id="biz-1"):
    return AuthUser.derive(User.from_dict(login_payload(role=role, business_id=business_id)["user"]), TOKENS)


class TestAvailableViews:
    def test_logged_out(self):
        assert available_views(None) == PUBLIC_VIEWS

    def test_admin_sees_everything(self):
        assert available_views(_auth("ADMIN")) == OPERATOR_VIEWS

    def test_staff_loses_admin_screens(self):
        views = available_views(_auth("STAFF"))
        assert "Dashboard" in views
        assert not set(views) & ADMIN_ONLY_VIEWS

    def test_customer(self):
        assert available_views(_auth("CUSTOMER", business_id=None)) == CUSTOMER_VIEWS

    def test_admin_role_without_business_is_not_an_operator(self):
        assert available_views(_auth("ADMIN", business_id=None)) == CUSTOMER_VIEWS


def test_pagination_helpers():
    meta = {"page": 2, "total_pages": 5, "total": 43, "has_prev": True, "has_next": False}
    assert pagination_label(meta) == "Page 2 of 5 (43 total)"
    assert pagination_label({"page": 1, "total_pages": 0, "total": 0}) == "Page 1 of 1 (0 total)"
    assert has_previous(meta)
    assert has_previous({"has_previous": True})
    assert not has_next(meta)
    assert not has_previous(None) and not has_next(None)


def test_period_bounds():
    today = date(2024, 3, 15)
    assert period_bounds("All time", today) == (None, None)
    assert period_bounds("Last 7 days", today) == ("2024-03-09", "2024-03-15")
    assert period_bounds("Last 30 days", today) == ("2024-02-15", "2024-03-15")
    assert period_bounds("This month", today) == ("2024-03-01", "2024-03-15")


def test_data_of():
    assert data_of({"data": {"branches": [1]}}, "branches") == [1]
    assert data_of({"data": {"branches": None}}, "branches", []) == []
    assert data_of({"data": []}, "branches", "x") == "x"
    assert data_of(None, "branches") is None


def test_transaction_row():
    row = transaction_row(
        {
            "amount": -30,
            "type": "SUBTRACT",
            "created_at": "2024-05-01T09:30:00.000Z",
            "customer_business": {"customer": {"name": "Aina", "phone_number": "+6012"}},
            "staff": {"user": {"name": "Sam"}},
        }
    )
    assert row == {
        "Date": "2024-05-01 09:30",
        "Customer": "Aina",
        "Phone": "+6012",
        "Points": "-30",
        "Type": "SUBTRACT",
        "Staff": "Sam",
    }
    assert transaction_row({"amount": 1200})["Points"] == "+1,200"


def test_redemption_row():
    row = redemption_row(
        {
            "created_at": "2024-05-02T10:00:00Z",
            "customer": {"name": "Ben"},
            "point_reward": {"name": "Free kopi", "points_cost": 100},
            "points_deducted": 100,
            "status": "PENDING",
        }
    )
    assert row == {
        "Date": "2024-05-02 10:00",
        "Customer": "Ben",
        "Reward": "Free kopi",
        "Points": 100,
        "Status": "PENDING",
    }


class TestPageReset:
    def test_changed_filters_return_to_first_page(self):
        state = {}
        reset_page_on_change(LEADERBOARD_PAGE, "marker", ("biz-1", None, None), state)
        state[LEADERBOARD_PAGE] = 4
        reset_page_on_change(LEADERBOARD_PAGE, "marker", ("biz-1", "2024-03-01", "2024-03-15"), state)
        assert state[LEADERBOARD_PAGE] == 1

    def test_same_filters_keep_the_page(self):
        state = {}
        reset_page_on_change(LEADERBOARD_PAGE, "marker", "kopi", state)
        state[LEADERBOARD_PAGE] = 3
        reset_page_on_change(LEADERBOARD_PAGE, "marker", "kopi", state)
        assert state[LEADERBOARD_PAGE] == 3

    def test_switching_business_resets(self):
        state = {"marker": ("biz-1", None, None), LEADERBOARD_PAGE: 2}
        reset_page_on_change(LEADERBOARD_PAGE, "marker", ("biz-2", None, None), state)
        assert state == {"marker": ("biz-2", None, None), LEADERBOARD_PAGE: 1}


def test_fmt_count_tolerates_null_counters():
    assert fmt_count(12345) == "12,345"
    assert fmt_count(None) == "0"
    assert fmt_count("oops") == "0"
    assert fmt_count({"total_points": None}.get("total_points")) == "0"

# pointnow_console/ui/counter.py
# SPDX-License-Identifier: Apache-2.0
"""Branch and staff pickers for counter actions (points, redemptions).

Every point transaction and counter redemption is attributed to a branch
and an employee. Staff users default to their own staff record.
"""

from __future__ import annotations

from typing import NamedTuple

import streamlit as st

from pointnow_console.api import branches, staff
from pointnow_console.api.errors import ApiClientError

from .components import data_of, show_api_error
from .keys import k

PICKER_LIMIT = 100


class Counter(NamedTuple):
    branch_id: str
    employee_id: str


def counter_picker(ctx: dict, page: str) -> Counter | None:
    """Render branch + staff selectors; None when either list is empty."""
    client, business_id = ctx["client"], ctx["business_id"]
    try:
        branch_rows = data_of(branches.get_all(client, business_id, limit=PICKER_LIMIT), "branches", [])
        staff_rows = data_of(staff.get_all(client, business_id, limit=PICKER_LIMIT), "staffs", [])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load branches and staff")
        return None

    if not branch_rows:
        st.warning("Add a branch before recording points.")
        return None
    if not staff_rows:
        st.warning("Add a staff member before recording points.")
        return None

    branch_names = {b["id"]: b.get("name") or b["id"] for b in branch_rows}
    staff_names = {
        s["id"]: (s.get("user") or {}).get("name") or s["id"] for s in staff_rows
    }
    me = ctx["auth"].user.id
    own = next((i for i, s in enumerate(staff_rows) if s.get("user_id") == me), 0)

    left, right = st.columns(2)
    branch_id = left.selectbox(
        "Branch", list(branch_names), format_func=branch_names.get, key=k(page, "branch")
    )
    employee_id = right.selectbox(
        "Staff", list(staff_names), index=own, format_func=staff_names.get, key=k(page, "staff")
    )
    return Counter(branch_id, employee_id)

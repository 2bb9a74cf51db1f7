# pointnow_console/views/staff.py
# SPDX-License-Identifier: Apache-2.0
"""Staff accounts for the operator's business."""

from __future__ import annotations

import streamlit as st

from pointnow_console.api import staff
from pointnow_console.api.errors import ApiClientError
from pointnow_console.services.phone import convert_phone_number
from pointnow_console.services.validation import ValidationError, validate_email
from pointnow_console.ui.components import data_of, show_api_error
from pointnow_console.ui.keys import k

PAGE = "staff"
LIST_LIMIT = 100


def render(ctx: dict) -> None:
    st.header("Staff")
    client, business_id = ctx["client"], ctx["business_id"]

    with st.expander("Add staff member"):
        with st.form(k(PAGE, "create"), clear_on_submit=True):
            name = st.text_input("Name")
            email = st.text_input("Email")
            phone = st.text_input("Phone number")
            if st.form_submit_button("Add"):
                try:
                    staff.create(
                        client,
                        business_id,
                        email=validate_email(email),
                        name=name.strip(),
                        phone_number=convert_phone_number(phone),
                    )
                    st.toast(f"Added {name.strip()}")
                except ValidationError as e:
                    st.error(str(e))
                except ApiClientError as e:
                    show_api_error(e, ctx["store"], action="Could not add staff")

    try:
        rows = data_of(staff.get_all(client, business_id, limit=LIST_LIMIT), "staffs", [])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load staff")
        return
    if not rows:
        st.info("No staff yet.")
        return

    me = ctx["auth"].user.id
    for s in rows:
        user = s.get("user") or {}
        info_col, action_col = st.columns([5, 1])
        info_col.markdown(
            f"**{user.get('name', '—')}** · {user.get('email', '')} · {user.get('phone_number', '')}"
        )
        # Operators cannot remove their own staff record.
        if action_col.button("Remove", key=k(PAGE, f"remove_{s['id']}"), disabled=s.get("user_id") == me):
            try:
                staff.delete(client, s["id"])
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Could not remove staff")
                return
            st.rerun()

# pointnow_console/views/branches.py
# SPDX-License-Identifier: Apache-2.0
"""Branch (outlet) management for the operator's business."""

from __future__ import annotations

import streamlit as st

from pointnow_console.api import branches
from pointnow_console.api.errors import ApiClientError
from pointnow_console.ui.components import data_of, show_api_error
from pointnow_console.ui.keys import k

PAGE = "branches"
LIST_LIMIT = 100


def render(ctx: dict) -> None:
    st.header("Branches")
    client, business_id = ctx["client"], ctx["business_id"]

    with st.form(k(PAGE, "create"), clear_on_submit=True):
        name = st.text_input("New branch name")
        if st.form_submit_button("Add branch") and name.strip():
            try:
                branches.create(client, business_id, name.strip())
                st.toast(f"Added {name.strip()}")
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Could not add branch")

    try:
        rows = data_of(branches.get_all(client, business_id, limit=LIST_LIMIT), "branches", [])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load branches")
        return
    if not rows:
        st.info("No branches yet.")
        return

    for b in rows:
        name_col, save_col, delete_col = st.columns([4, 1, 1])
        new_name = name_col.text_input(
            "Name", value=b.get("name", ""), key=k(PAGE, f"name_{b['id']}"), label_visibility="collapsed"
        )
        if save_col.button("Save", key=k(PAGE, f"save_{b['id']}"), disabled=new_name == b.get("name")):
            try:
                branches.update(client, b["id"], name=new_name.strip())
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Could not rename branch")
                return
            st.rerun()
        if delete_col.button("Delete", key=k(PAGE, f"delete_{b['id']}")):
            try:
                branches.delete(client, b["id"])
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Could not delete branch")
                return
            st.rerun()

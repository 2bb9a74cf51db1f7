# pointnow_console/views/customers.py
# SPDX-License-Identifier: Apache-2.0
"""
Customer management: list and search, edit contact details, bulk import
from CSV/XLSX, and export to XLSX.

Import is two-step: the file is parsed and validated locally first
(`services.customer_import`), the operator reviews accepted and rejected
rows, and only then is the batch sent.
"""

from __future__ import annotations

import logging

import streamlit as st

from pointnow_console.api import customers
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.state import CUSTOMERS_PAGE, PENDING_IMPORT, reset_page_on_change
from pointnow_console.services.balance import (
    SOURCE_BUSINESS_DETAIL,
    SOURCE_SEARCH,
    CustomerRecord,
    to_customer_records,
)
from pointnow_console.services.customer_export import export_customers_xlsx
from pointnow_console.services.customer_import import (
    UPLOAD_TYPES,
    parse_customer_file,
    to_batch_payload,
)
from pointnow_console.services.phone import convert_phone_number
from pointnow_console.ui.components import customer_table, data_of, pager, show_api_error
from pointnow_console.ui.keys import k

log = logging.getLogger(__name__)

PAGE = "customers"
EXPORT_PAGE_LIMIT = 100


def _load(ctx: dict, query: str) -> tuple[list[CustomerRecord], dict | None] | None:
    client, business_id = ctx["client"], ctx["business_id"]
    limit = ctx["settings"].PAGE_LIMIT
    page = st.session_state[CUSTOMERS_PAGE]
    token = ctx["tracker"].begin(f"{PAGE}:list")
    try:
        if query:
            resp = customers.search(client, query, business_id, page=page, limit=limit, cancel_token=token)
            source = SOURCE_SEARCH
        else:
            resp = customers.get_by_business(client, business_id, page=page, limit=limit, cancel_token=token)
            source = SOURCE_BUSINESS_DETAIL
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load customers")
        return None
    records = to_customer_records(data_of(resp, "customers", []), business_id, source)
    return records, data_of(resp, "metadata")


def _edit(ctx: dict, records: list[CustomerRecord]) -> None:
    if not records:
        return
    with st.expander("Edit a customer"):
        by_id = {r.id: r for r in records}
        chosen = st.selectbox(
            "Customer", list(by_id), format_func=lambda i: by_id[i].name, key=k(PAGE, "edit_pick")
        )
        record = by_id[chosen]
        with st.form(k(PAGE, f"edit_{record.id}")):
            name = st.text_input("Name", value=record.name)
            email = st.text_input("Email", value=record.email)
            phone = st.text_input("Phone number", value=record.phone_number)
            saved = st.form_submit_button("Save")
        if not saved:
            return
        try:
            customers.update_by_business(
                ctx["client"],
                record.id,
                ctx["business_id"],
                {
                    "name": name.strip(),
                    "email": email.strip(),
                    "phone_number": convert_phone_number(phone),
                },
            )
        except ApiClientError as e:
            show_api_error(e, ctx["store"], action="Could not update customer")
            return
        st.toast(f"Updated {name.strip()}")
        st.rerun()


def _import(ctx: dict) -> None:
    with st.expander("Import customers (CSV / Excel)"):
        st.caption(
            "Columns: name, email, phone_number (or phone). Row 1 is the header. "
            "Excel files must be .xlsx."
        )
        upload = st.file_uploader("Customer file", type=list(UPLOAD_TYPES), key=k(PAGE, "upload"))
        if upload is not None and st.button("Check file", key=k(PAGE, "check")):
            st.session_state[PENDING_IMPORT] = parse_customer_file(
                upload.getvalue(), ctx["business_id"], upload.name
            )

        result = st.session_state.get(PENDING_IMPORT)
        if result is None:
            return
        for message in result.errors:
            st.warning(message)
        if not result.success:
            return
        st.success(f"{len(result.data)} customer(s) ready to import.")
        st.dataframe(
            [{"Name": c.name, "Email": c.email, "Phone": c.phone_number} for c in result.data],
            hide_index=True,
        )
        if st.button("Import", type="primary", key=k(PAGE, "confirm_import")):
            try:
                customers.create_with_user_batch(ctx["client"], to_batch_payload(result.data))
            except ApiClientError as e:
                show_api_error(e, ctx["store"], action="Import failed")
                return
            log.info("Imported %d customers into business %s", len(result.data), ctx["business_id"])
            st.session_state[PENDING_IMPORT] = None
            st.toast(f"Imported {len(result.data)} customers")
            st.rerun()


def _all_customers(ctx: dict) -> list[CustomerRecord]:
    """Every customer of the business, page by page."""
    out: list[CustomerRecord] = []
    page = 1
    while True:
        resp = customers.get_by_business(
            ctx["client"], ctx["business_id"], page=page, limit=EXPORT_PAGE_LIMIT
        )
        out.extend(
            to_customer_records(data_of(resp, "customers", []), ctx["business_id"], SOURCE_BUSINESS_DETAIL)
        )
        meta = data_of(resp, "metadata", {}) or {}
        if not meta.get("has_next"):
            return out
        page += 1


def _export(ctx: dict) -> None:
    if not st.button("Prepare export", key=k(PAGE, "export")):
        return
    try:
        with st.spinner("Collecting customers…"):
            records = _all_customers(ctx)
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Export failed")
        return
    filename, content = export_customers_xlsx(records, ctx["business_id"])
    st.download_button(
        f"Download {filename}",
        data=content,
        file_name=filename,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        key=k(PAGE, "download"),
    )


def render(ctx: dict) -> None:
    st.header("Customers")
    query = st.text_input("Search", key=k(PAGE, "query")).strip()
    reset_page_on_change(CUSTOMERS_PAGE, k(PAGE, "last_query"), query)

    loaded = _load(ctx, query)
    if loaded is not None:
        records, metadata = loaded
        customer_table(records)
        pager(PAGE, CUSTOMERS_PAGE, metadata)
        _edit(ctx, records)

    _import(ctx)
    _export(ctx)

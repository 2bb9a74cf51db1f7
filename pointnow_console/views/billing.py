# pointnow_console/views/billing.py
# SPDX-License-Identifier: Apache-2.0
"""
Billing (admins only).

Shows the current plan, the SMS credit wallet with top-up, and invoices.
Card details are never collected here: a top-up creates a checkout session
on the backend, and payment methods are managed on the provider's hosted
billing portal.
"""

from __future__ import annotations

import logging

import streamlit as st

from pointnow_console.api import payment, subscription, wallet
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.constants import PAYMENT_PROVIDER, TOPUP_AMOUNTS, TOPUP_CURRENCY
from pointnow_console.services.billing import (
    invoice_row,
    monthly_product,
    plan_name,
    upgrade_link,
    validate_topup_amount,
)
from pointnow_console.ui.components import data_of, show_api_error, wallet_metric
from pointnow_console.ui.keys import k
from pointnow_console.ui.layout import view_header

log = logging.getLogger(__name__)

PAGE = "billing"


def _plan(ctx: dict) -> None:
    st.subheader("Plan")
    client, business_id = ctx["client"], ctx["business_id"]
    try:
        active = data_of(
            subscription.get_active_by_business_id(client, business_id, PAYMENT_PROVIDER),
            "subscription",
        )
        subscription_type = None
        if active and active.get("subscription_type_id"):
            subscription_type = data_of(
                subscription.get_type_by_id(client, active["subscription_type_id"]),
                "subscription_type",
            )
        products = data_of(subscription.get_products(client, is_trial=False), "subscription_products", [])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load your plan")
        return

    current = plan_name(subscription_type)
    st.metric("Current plan", current)
    product = monthly_product(products)
    if current == "FREE" and product and product.get("link"):
        st.link_button(
            f"Upgrade to Professional · MYR {product.get('price') or 0:,} / month",
            upgrade_link(product["link"], business_id),
        )


def _wallet(ctx: dict) -> None:
    st.subheader("Messaging credits")
    client, business_id = ctx["client"], ctx["business_id"]
    try:
        balance = wallet.current_balance(wallet.get_usage_caches(client, business_id))
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load wallet")
        return
    wallet_metric(balance)

    preset = st.radio(
        f"Top-up amount ({TOPUP_CURRENCY.upper()})",
        [*TOPUP_AMOUNTS, "Custom"],
        horizontal=True,
        key=k(PAGE, "preset"),
    )
    amount = preset
    if preset == "Custom":
        amount = st.number_input("Custom amount", min_value=1.0, step=1.0, key=k(PAGE, "custom"))
    if not st.button("Top up", key=k(PAGE, "topup"), type="primary"):
        return
    try:
        value = validate_topup_amount(amount)
        resp = payment.create_checkout_session(client, business_id, value, TOPUP_CURRENCY)
    except ValueError as e:
        st.error(str(e))
        return
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not start top-up")
        return
    session = data_of(resp, "checkout_session", {})
    log.info("Top-up checkout created for business %s", business_id)
    st.success(
        f"Checkout created for {TOPUP_CURRENCY.upper()} {value:,.2f}. "
        f"Reference: {session.get('payment_intent_id', '—')}"
    )
    st.caption("Complete the payment from the billing portal; credits appear once it succeeds.")


def _portal(ctx: dict) -> None:
    if not st.button("Open billing portal", key=k(PAGE, "portal")):
        return
    try:
        resp = payment.create_billing_portal_session(ctx["client"], ctx["business_id"])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not open billing portal")
        return
    url = (data_of(resp, "session", {}) or {}).get("url")
    if url:
        st.link_button("Continue to billing portal", url)
    else:
        st.error("Billing portal is unavailable right now.")


def _invoices(ctx: dict) -> None:
    st.subheader("Invoices")
    try:
        resp = payment.get_invoices(ctx["client"], ctx["business_id"])
    except ApiClientError as e:
        show_api_error(e, ctx["store"], action="Could not load invoices")
        return
    invoices = (data_of(resp, "invoices", {}) or {}).get("data") or []
    if not invoices:
        st.info("No invoices yet. Your invoices will appear here after your first payment.")
        return
    st.dataframe(
        [invoice_row(i) for i in invoices],
        hide_index=True,
        use_container_width=True,
        column_config={"Link": st.column_config.LinkColumn("Link", display_text="View")},
    )


def render(ctx: dict) -> None:
    view_header("Billing", "Manage your subscription and messaging credits")
    _plan(ctx)
    _wallet(ctx)
    _portal(ctx)
    _invoices(ctx)

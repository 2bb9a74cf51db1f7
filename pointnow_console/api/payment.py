# pointnow_console/api/payment.py
# SPDX-License-Identifier: Apache-2.0
"""Payment endpoints: wallet top-up checkout, billing portal and invoices.

Card collection itself happens on the payment provider's hosted pages; the
console only requests sessions and links to them.
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient


def create_checkout_session(
    client: ApiClient, business_id: str, amount: float, currency: str = "myr"
) -> dict[str, Any]:
    return client.post(
        "/payment/checkout",
        {"business_id": business_id, "currency": currency, "amount": amount},
    )


def create_billing_portal_session(client: ApiClient, business_id: str) -> dict[str, Any]:
    return client.get(f"/payment/billing-portal/business/{business_id}")


def get_invoices(client: ApiClient, business_id: str) -> dict[str, Any]:
    return client.get(f"/payment/invoices/business/{business_id}")

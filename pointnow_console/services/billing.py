# pointnow_console/services/billing.py
# SPDX-License-Identifier: Apache-2.0
"""Formatting helpers for the billing screen (plans, invoices, top-ups)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

FREE_PLAN = "FREE"


def invoice_amount(amount_cents: int | float | None, currency: str | None) -> str:
    """Invoice amounts arrive in cents: ``(1050, "myr") -> "MYR 10.50"``."""
    return f"{(currency or '').upper()} {(amount_cents or 0) / 100:,.2f}".strip()


def invoice_date(timestamp: int | float | None) -> str:
    if not timestamp:
        return "—"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%d %b %Y")


def invoice_row(invoice: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "Invoice": invoice.get("number") or invoice.get("id", ""),
        "Date": invoice_date(invoice.get("created")),
        "Amount": invoice_amount(invoice.get("total", invoice.get("amount_due")), invoice.get("currency")),
        "Status": (invoice.get("status") or "").title(),
        "Link": invoice.get("hosted_invoice_url") or "",
    }


def upgrade_link(link: str, business_id: str) -> str:
    """Attach the business as ``client_reference_id`` to a plan's payment link."""
    parts = urlsplit(link)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k != "client_reference_id"]
    query.append(("client_reference_id", business_id))
    return urlunsplit(parts._replace(query=urlencode(query)))


def plan_name(subscription_type: Mapping[str, Any] | None) -> str:
    """Upper-cased plan name; no active subscription means the free plan."""
    name = (subscription_type or {}).get("name")
    return str(name).upper() if name else FREE_PLAN


def monthly_product(products: Iterable[Mapping[str, Any]]) -> Mapping[str, Any] | None:
    return next((p for p in products if p.get("duration") == "MONTHLY"), None)


def validate_topup_amount(amount: Any) -> float:
    """Top-ups are a positive amount in whole currency units."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValueError("Please enter a valid amount") from None
    if value <= 0:
        raise ValueError("Top-up amount must be greater than zero")
    return value

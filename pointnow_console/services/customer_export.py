# pointnow_console/services/customer_export.py
# SPDX-License-Identifier: Apache-2.0
"""Customer list export to an in-memory ``.xlsx`` workbook."""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Final

from openpyxl import Workbook

from .balance import CustomerRecord, resolve_points

EXPORT_COLUMNS: Final[tuple[str, ...]] = ("Name", "Email", "Phone Number", "Points", "Joined Date")
SHEET_TITLE: Final[str] = "Customers"


def export_filename(today: date | None = None) -> str:
    return f"customers_export_{(today or date.today()).isoformat()}.xlsx"


def _joined(created_at: str | None) -> str:
    # Keep only the date part of an ISO timestamp.
    return (created_at or "")[:10]


def _row(customer: CustomerRecord | Mapping[str, Any], business_id: str | None) -> list[Any]:
    if isinstance(customer, CustomerRecord):
        return [
            customer.name,
            customer.email,
            customer.phone_number,
            customer.points,
            _joined(customer.created_at),
        ]
    return [
        customer.get("name") or "",
        customer.get("email") or "",
        customer.get("phone_number") or "",
        resolve_points(customer, business_id),
        _joined(customer.get("created_at")),
    ]


def export_customers_xlsx(
    customers: Iterable[CustomerRecord | Mapping[str, Any]],
    business_id: str | None,
    today: date | None = None,
) -> tuple[str, bytes]:
    """Build the export workbook.

    Returns:
      ``(filename, xlsx_bytes)`` ready for `st.download_button`.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append(list(EXPORT_COLUMNS))
    for customer in customers:
        ws.append(_row(customer, business_id))

    buf = io.BytesIO()
    wb.save(buf)
    return export_filename(today), buf.getvalue()

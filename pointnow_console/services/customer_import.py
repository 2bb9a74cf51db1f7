# pointnow_console/services/customer_import.py
# SPDX-License-Identifier: Apache-2.0
"""
Bulk customer import from an uploaded spreadsheet.

Accepts ``.csv`` (read with the standard `csv` module) or any workbook
`openpyxl` can open (first sheet only). Row 1 is the header. Expected
columns, matched case-insensitively after trimming:

  • ``name``
  • ``email``
  • ``phone_number`` / ``phone number`` / ``phone``

Each data row is validated in order (name, email present, email shape,
phone present); the first failure records ``"Row N: <reason>"`` (N is the
spreadsheet row, i.e. index + 2) and the row is skipped. Valid rows become
`ParsedCustomer` records bound to the importing business, with a leading
``+`` removed from the phone.

The parse never raises: anything unreadable is reported in ``errors`` with
``success=False``.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from openpyxl import load_workbook

log = logging.getLogger(__name__)

EMAIL_RE: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_HEADERS: Final[frozenset[str]] = frozenset({"phone_number", "phone number", "phone"})
# openpyxl reads Office Open XML only; legacy .xls workbooks are refused.
UPLOAD_TYPES: Final[tuple[str, ...]] = ("csv", "xlsx")


@dataclass(frozen=True)
class ParsedCustomer:
    name: str
    email: str
    phone_number: str
    business_id: str


@dataclass
class CustomerImportResult:
    success: bool
    data: list[ParsedCustomer] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    # Spreadsheet apps store long digit strings (phones) as floats.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _find(row: Mapping[str, Any], names: Iterable[str]) -> str:
    wanted = set(names)
    for key, value in row.items():
        if key is not None and str(key).strip().lower() in wanted:
            return _cell_text(value)
    return ""


def _csv_rows(data: bytes) -> list[dict[str, Any]]:
    text = data.decode("utf-8-sig")
    reader = csv.DictReader(io.StringIO(text), restval="")
    return [row for row in reader if any(_cell_text(v) for v in row.values())]


def _workbook_rows(data: bytes) -> list[dict[str, Any]]:
    wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        sheet = wb.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        keys = [_cell_text(h) for h in header]
        out = []
        for values in rows:
            if not any(_cell_text(v) for v in values):
                continue
            out.append({k: v for k, v in zip(keys, values) if k})
        return out
    finally:
        wb.close()


def read_rows(data: bytes, filename: str | None = None) -> list[dict[str, Any]]:
    """Header-keyed data rows of an uploaded file, blank rows dropped."""
    name = (filename or "").lower()
    if name.endswith(".csv"):
        return _csv_rows(data)
    if name.endswith(".xls"):
        raise ValueError("legacy .xls files are not supported, save the sheet as .xlsx or .csv")
    return _workbook_rows(data)


def validate_row(row: Mapping[str, Any], row_number: int, business_id: str) -> ParsedCustomer | str:
    """Return the parsed customer, or the error message for this row."""
    name = _find(row, ("name",))
    email = _find(row, ("email",))
    phone = _find(row, PHONE_HEADERS)
    if phone.startswith("+"):
        phone = phone[1:]

    if not name:
        return f"Row {row_number}: Name is required"
    if not email:
        return f"Row {row_number}: Email is required"
    if not EMAIL_RE.match(email):
        return f"Row {row_number}: Invalid email format: {email}"
    if not phone:
        return f"Row {row_number}: Phone number is required"
    return ParsedCustomer(name=name, email=email, phone_number=phone, business_id=business_id)


def parse_customer_file(data: bytes, business_id: str, filename: str | None = None) -> CustomerImportResult:
    """Parse and validate an uploaded customer list.

    Args:
      data: Raw file bytes.
      business_id: Business every imported customer is attached to.
      filename: Picks the reader: ``*.csv`` as CSV, ``*.xls`` refused, anything
        else as an .xlsx workbook.

    Returns:
      `CustomerImportResult`. ``success`` is False when the file is empty or
      unreadable, or when every row failed validation; partial failures keep
      ``success=True`` and list the rejected rows in ``errors``.
    """
    if not data:
        return CustomerImportResult(success=False, errors=["Failed to read file"])
    try:
        rows = read_rows(data, filename)
    except Exception as e:
        log.warning("Customer import of %s failed: %s", filename or "<upload>", e)
        return CustomerImportResult(success=False, errors=[f"Failed to parse CSV: {e}"])

    if not rows:
        return CustomerImportResult(success=False, errors=["CSV file is empty"])

    parsed: list[ParsedCustomer] = []
    errors: list[str] = []
    for index, row in enumerate(rows):
        result = validate_row(row, index + 2, business_id)
        if isinstance(result, str):
            errors.append(result)
        else:
            parsed.append(result)

    if not parsed and errors:
        return CustomerImportResult(success=False, errors=errors)
    return CustomerImportResult(success=True, data=parsed, errors=errors)


def to_batch_payload(customers: Iterable[ParsedCustomer]) -> list[dict[str, Any]]:
    """Entries for `customers.create_with_user_batch`."""
    return [
        {
            "name": c.name,
            "email": c.email,
            "phone_number": c.phone_number,
            "business": {"business_id": c.business_id},
        }
        for c in customers
    ]

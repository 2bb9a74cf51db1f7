# tests/test_customer_import.py
# SPDX-License-Identifier: Apache-2.0
import io

from openpyxl import Workbook

from pointnow_console.services.customer_import import (
    UPLOAD_TYPES,
    ParsedCustomer,
    parse_customer_file,
    to_batch_payload,
)

FIVE_ROWS = (
    "name,email,phone_number\n"
    "Aina,aina@kopi.my,+60123456789\n"
    "Ben,ben@kopi.my,60129998888\n"
    "Chong,,0131112222\n"
    "Dev,not-an-email,0144445555\n"
    "Eli,eli@kopi.my,0155556666\n"
)


def _xlsx(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_row_accounting_on_mixed_sheet():
    result = parse_customer_file(FIVE_ROWS.encode(), "biz-1", "customers.csv")
    assert result.success
    assert [c.name for c in result.data] == ["Aina", "Ben", "Eli"]
    assert len(result.errors) == 2
    assert result.errors[0] == "Row 4: Email is required"
    assert result.errors[1] == "Row 5: Invalid email format: not-an-email"


def test_leading_plus_stripped_and_business_bound():
    result = parse_customer_file(FIVE_ROWS.encode(), "biz-1", "customers.csv")
    assert result.data[0] == ParsedCustomer("Aina", "aina@kopi.my", "60123456789", "biz-1")


def test_header_aliases_and_case():
    text = "Name,EMAIL,Phone Number\nAina,aina@kopi.my,0123\n"
    result = parse_customer_file(text.encode(), "b", "c.csv")
    assert result.data[0].phone_number == "0123"


def test_bom_is_ignored():
    text = "\ufeffname,email,phone\nAina,aina@kopi.my,0123\n"
    result = parse_customer_file(text.encode("utf-8"), "b", "c.csv")
    assert result.success and result.data[0].name == "Aina"


def test_missing_phone():
    text = "name,email\nAina,aina@kopi.my\n"
    result = parse_customer_file(text.encode(), "b", "c.csv")
    assert not result.success
    assert result.errors == ["Row 2: Phone number is required"]


def test_missing_name_reported_first():
    text = "name,email,phone\n,,\n ,x,1\n"
    result = parse_customer_file(text.encode(), "b", "c.csv")
    assert result.errors == ["Row 2: Name is required"]


def test_header_only_is_empty():
    result = parse_customer_file(b"name,email,phone\n", "b", "c.csv")
    assert not result.success
    assert result.errors == ["CSV file is empty"]


def test_no_bytes():
    result = parse_customer_file(b"", "b", "c.csv")
    assert not result.success
    assert result.errors == ["Failed to read file"]


def test_unreadable_workbook():
    result = parse_customer_file(b"definitely not a zip", "b", "c.xlsx")
    assert not result.success
    assert result.errors[0].startswith("Failed to parse CSV:")


def test_legacy_xls_is_refused_with_a_hint():
    result = parse_customer_file(b"\xd0\xcf\x11\xe0 old excel", "b", "Customers.XLS")
    assert not result.success
    assert ".xlsx" in result.errors[0]


def test_upload_types_match_readable_formats():
    assert UPLOAD_TYPES == ("csv", "xlsx")


def test_xlsx_numeric_phones():
    data = _xlsx(
        [
            ["name", "email", "phone"],
            ["Aina", "aina@kopi.my", 60123456789],
            [None, None, None],
            ["Ben", "ben@kopi.my", 60129998888.0],
        ]
    )
    result = parse_customer_file(data, "biz-7", "list.xlsx")
    assert result.success and result.errors == []
    assert [c.phone_number for c in result.data] == ["60123456789", "60129998888"]
    assert all(c.business_id == "biz-7" for c in result.data)


def test_xlsx_header_only():
    result = parse_customer_file(_xlsx([["name", "email", "phone"]]), "b", "list.xlsx")
    assert result.errors == ["CSV file is empty"]


def test_batch_payload_shape():
    payload = to_batch_payload([ParsedCustomer("Aina", "aina@kopi.my", "6012", "biz-1")])
    assert payload == [
        {
            "name": "Aina",
            "email": "aina@kopi.my",
            "phone_number": "6012",
            "business": {"business_id": "biz-1"},
        }
    ]

# tests/test_billing.py
# SPDX-License-Identifier: Apache-2.0
import pytest

from pointnow_console.services.billing import (
    invoice_amount,
    invoice_date,
    invoice_row,
    monthly_product,
    plan_name,
    upgrade_link,
    validate_topup_amount,
)


def test_invoice_amount_is_in_cents():
    assert invoice_amount(1050, "myr") == "MYR 10.50"
    assert invoice_amount(None, None) == "0.00"


def test_invoice_date():
    assert invoice_date(1717200000) == "01 Jun 2024"
    assert invoice_date(None) == "—"


def test_invoice_row():
    row = invoice_row(
        {
            "id": "in_1",
            "number": "PN-0001",
            "created": 1717200000,
            "total": 5000,
            "currency": "myr",
            "status": "paid",
            "hosted_invoice_url": "https://pay.example/in_1",
        }
    )
    assert row == {
        "Invoice": "PN-0001",
        "Date": "01 Jun 2024",
        "Amount": "MYR 50.00",
        "Status": "Paid",
        "Link": "https://pay.example/in_1",
    }


def test_upgrade_link_sets_reference():
    assert upgrade_link("https://buy.example/plan?locale=en", "biz-1") == (
        "https://buy.example/plan?locale=en&client_reference_id=biz-1"
    )
    assert upgrade_link("https://buy.example/plan?client_reference_id=old", "biz-2") == (
        "https://buy.example/plan?client_reference_id=biz-2"
    )


def test_plan_name():
    assert plan_name(None) == "FREE"
    assert plan_name({"name": "Professional"}) == "PROFESSIONAL"


def test_monthly_product():
    products = [{"duration": "YEARLY", "price": 990}, {"duration": "MONTHLY", "price": 99}]
    assert monthly_product(products)["price"] == 99
    assert monthly_product([]) is None


def test_topup_amount():
    assert validate_topup_amount(50) == 50.0
    with pytest.raises(ValueError):
        validate_topup_amount(0)
    with pytest.raises(ValueError):
        validate_topup_amount("lots")

# tests/test_validation.py
# SPDX-License-Identifier: Apache-2.0
import pytest

from pointnow_console.services.validation import (
    ValidationError,
    blast_cost,
    password_problems,
    recipient_phones,
    validate_blast,
    validate_business_registration,
    validate_email,
    validate_password_reset,
    validate_points_input,
)

RATE = {"name": "SMS", "charge": 0.5}
CUSTOMERS = [
    {"id": "1", "phone_number": " +60111 "},
    {"id": "2", "phone_number": ""},
    {"id": "3", "phone_number": "+60133"},
]


def test_email():
    assert validate_email("  a@b.co ") == "a@b.co"
    for bad in ("", "a@b", "a b@c.de", None):
        with pytest.raises(ValidationError, match="valid email"):
            validate_email(bad)


def test_password_rules():
    assert password_problems("Str0ng!pw") == []
    assert password_problems("weak") == [
        "At least 8 characters",
        "One uppercase letter",
        "One number",
        "One special character",
    ]


class TestPasswordReset:
    def test_missing_token_first(self):
        with pytest.raises(ValidationError, match="missing reset token"):
            validate_password_reset("", "x", "y")

    def test_mismatch(self):
        with pytest.raises(ValidationError, match="do not match"):
            validate_password_reset("t", "Str0ng!pw", "Str0ng!px")

    def test_weak(self):
        with pytest.raises(ValidationError, match="requirements"):
            validate_password_reset("t", "weak", "weak")

    def test_ok(self):
        validate_password_reset("t", "Str0ng!pw", "Str0ng!pw")


def test_business_registration_coordinates():
    assert validate_business_registration("p", "p", "3.139", " 101.68 ") == (3.139, 101.68)
    with pytest.raises(ValidationError, match="latitude and longitude"):
        validate_business_registration("p", "p", "", "101")
    with pytest.raises(ValidationError, match="latitude and longitude"):
        validate_business_registration("p", "p", "north", "101")
    with pytest.raises(ValidationError, match="do not match"):
        validate_business_registration("p", "q", "1", "1")


@pytest.mark.parametrize(
    "raw, message",
    [
        ("", "Please enter the number of points"),
        ("12.5", "Points must be a whole number"),
        ("-3", "Points must be a whole number"),
        ("12345678901", "Points can have at most 10 digits"),
        ("0", "Points must be greater than zero"),
    ],
)
def test_points_input_rejected(raw, message):
    with pytest.raises(ValidationError) as exc:
        validate_points_input(raw)
    assert str(exc.value) == message


def test_points_input_accepted():
    assert validate_points_input(" 250 ") == 250
    assert validate_points_input("9999999999") == 9999999999


class TestBlast:
    def test_phones_trimmed_and_filtered(self):
        assert recipient_phones(CUSTOMERS) == ["+60111", "+60133"]

    def test_quote(self):
        quote = blast_cost(CUSTOMERS, RATE, 5)
        assert (quote.recipients, quote.total_cost) == (2, 1.0)
        assert quote.sufficient

    def test_no_rate_never_sufficient(self):
        with pytest.raises(ValidationError, match="Insufficient balance"):
            validate_blast("hi", CUSTOMERS, None, 100)

    def test_empty_message(self):
        with pytest.raises(ValidationError, match="enter a message"):
            validate_blast("   ", CUSTOMERS, RATE, 100)

    def test_no_selection(self):
        with pytest.raises(ValidationError, match="at least one customer"):
            validate_blast("hi", [], RATE, 100)

    def test_insufficient_balance(self):
        with pytest.raises(ValidationError, match="Insufficient balance"):
            validate_blast("hi", CUSTOMERS, RATE, 0.99)

    def test_nobody_has_a_phone(self):
        with pytest.raises(ValidationError, match="don't have phone numbers"):
            validate_blast("hi", [CUSTOMERS[1]], RATE, 100)

    def test_ok(self):
        assert validate_blast("Promo {name}", CUSTOMERS, RATE, 1.0) == ["+60111", "+60133"]

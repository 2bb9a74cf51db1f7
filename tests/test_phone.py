# tests/test_phone.py
# SPDX-License-Identifier: Apache-2.0
import pytest

from pointnow_console.services.phone import convert_phone_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0123456789", "+60123456789"),
        ("60123456789", "+60123456789"),
        ("+60123456789", "+60123456789"),
        ("  0123456789 ", "+60123456789"),
        ("+1234567890", "+1234567890"),
        ("+44 20 7946 0000", "+44 20 7946 0000"),
        ("123456", "123456"),
        ("", ""),
        ("012-345 6789", "+6012-345 6789"),
    ],
)
def test_convert_phone_number(raw, expected):
    assert convert_phone_number(raw) == expected


@pytest.mark.parametrize("raw", ["0123456789", "60123", "+60", "+1", "abc", "", "0", "+"])
def test_idempotent(raw):
    once = convert_phone_number(raw)
    assert convert_phone_number(once) == once


def test_none_is_tolerated():
    assert convert_phone_number(None) == ""

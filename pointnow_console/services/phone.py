# pointnow_console/services/phone.py
# SPDX-License-Identifier: Apache-2.0
"""
Phone number normalization to Malaysian E.164 (``+60...``).

Only the prefix is rewritten; digits are never validated, padded or
stripped of separators. The function is total (any string in, a string out)
and idempotent.

    >>> convert_phone_number("0123456789")
    '+60123456789'
    >>> convert_phone_number("60123456789")
    '+60123456789'
    >>> convert_phone_number(" +60123456789 ")
    '+60123456789'
    >>> convert_phone_number("+44123")
    '+44123'
"""

from __future__ import annotations

from typing import Final

COUNTRY_CODE: Final[str] = "60"


def convert_phone_number(phone_number: str) -> str:
    cleaned = (phone_number or "").strip()
    if cleaned.startswith("+" + COUNTRY_CODE):
        return cleaned

    bare = cleaned[1:] if cleaned.startswith("+") else cleaned
    if bare.startswith(COUNTRY_CODE):
        return f"+{bare}"
    if bare.startswith("0"):
        return f"+{COUNTRY_CODE}{bare[1:]}"
    # Other country codes keep their "+"; anything else is returned as typed.
    return cleaned

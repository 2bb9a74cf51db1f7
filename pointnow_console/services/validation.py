# pointnow_console/services/validation.py
# SPDX-License-Identifier: Apache-2.0
"""
Client-side form checks.

These run before any request is made and only catch what the operator can fix
in the form; the backend repeats its own validation and its messages are
shown verbatim. Every failure is a `ValidationError` carrying the message to
display.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

EMAIL_RE: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SPECIAL_CHARS: Final[str] = '!@#$%^&*(),.?":{}|<>'
MIN_PASSWORD_LENGTH: Final[int] = 8
MAX_POINT_DIGITS: Final[int] = 10


class ValidationError(ValueError):
    """Input rejected before reaching the backend; ``str(e)`` is user-facing."""


def validate_email(email: str) -> str:
    """Return the trimmed address or raise."""
    trimmed = (email or "").strip()
    if not trimmed or not EMAIL_RE.match(trimmed):
        raise ValidationError("Please provide a valid email address")
    return trimmed


def password_problems(password: str) -> list[str]:
    """Unmet password rules, in display order; empty when the password is acceptable."""
    pw = password or ""
    problems = []
    if len(pw) < MIN_PASSWORD_LENGTH:
        problems.append(f"At least {MIN_PASSWORD_LENGTH} characters")
    if not re.search(r"[A-Z]", pw):
        problems.append("One uppercase letter")
    if not re.search(r"[a-z]", pw):
        problems.append("One lowercase letter")
    if not re.search(r"\d", pw):
        problems.append("One number")
    if not any(ch in SPECIAL_CHARS for ch in pw):
        problems.append("One special character")
    return problems


def validate_password_reset(token: str | None, password: str, confirm: str) -> None:
    if not token:
        raise ValidationError(
            "Invalid or missing reset token. Please request a new password reset link."
        )
    if password != confirm:
        raise ValidationError("Passwords do not match")
    if password_problems(password):
        raise ValidationError("Password does not meet requirements")


def _coordinate(value: Any) -> float | None:
    if value is None or str(value).strip() == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_business_registration(
    password: str, confirm: str, latitude: Any, longitude: Any
) -> tuple[float, float]:
    """Check the business sign-up form; returns ``(latitude, longitude)`` as floats."""
    if password != confirm:
        raise ValidationError("Passwords do not match")
    lat = _coordinate(latitude)
    lng = _coordinate(longitude)
    if lat is None or lng is None:
        raise ValidationError("Please provide latitude and longitude for your business location")
    return lat, lng


def validate_points_input(raw: str) -> int:
    """Parse the point-entry field: a positive whole number of at most 10 digits."""
    text = (raw or "").strip()
    if not text:
        raise ValidationError("Please enter the number of points")
    if not text.isdigit():
        raise ValidationError("Points must be a whole number")
    if len(text) > MAX_POINT_DIGITS:
        raise ValidationError(f"Points can have at most {MAX_POINT_DIGITS} digits")
    value = int(text)
    if value <= 0:
        raise ValidationError("Points must be greater than zero")
    return value


def _has_phone(customer: Mapping[str, Any]) -> bool:
    return bool(str(customer.get("phone_number") or "").strip())


def recipient_phones(customers: Iterable[Mapping[str, Any]]) -> list[str]:
    """Trimmed phone numbers of the customers that have one, in selection order."""
    return [str(c["phone_number"]).strip() for c in customers if _has_phone(c)]


@dataclass(frozen=True)
class BlastQuote:
    recipients: int
    charge: float
    total_cost: float
    balance: float

    @property
    def sufficient(self) -> bool:
        return self.balance >= self.total_cost


def blast_cost(
    customers: Sequence[Mapping[str, Any]],
    config_type: Mapping[str, Any] | None,
    balance: float,
) -> BlastQuote:
    """Price a blast: one message per selected customer with a phone number.

    Without a rate (`config_type` is None) the quote is never sufficient.
    """
    recipients = len(recipient_phones(customers))
    charge = float(config_type.get("charge") or 0) if config_type is not None else 0.0
    return BlastQuote(recipients, charge, recipients * charge, balance or 0)


def validate_blast(
    message: str,
    customers: Sequence[Mapping[str, Any]],
    config_type: Mapping[str, Any] | None,
    balance: float,
) -> list[str]:
    """Check a blast before sending; returns the phone numbers to send to."""
    if not (message or "").strip():
        raise ValidationError("Please enter a message")
    if not customers:
        raise ValidationError("Please select at least one customer")
    quote = blast_cost(customers, config_type, balance)
    if config_type is None or not quote.sufficient:
        raise ValidationError("Insufficient balance. Please top up your wallet.")
    phones = recipient_phones(customers)
    if not phones:
        raise ValidationError(
            "Selected customers don't have phone numbers. "
            "Please select customers with phone numbers."
        )
    return phones

# pointnow_console/core/constants.py
# SPDX-License-Identifier: Apache-2.0
"""
Console-wide constants: pagination defaults, display labels and the
config-type name used to price SMS blasts.
"""

from __future__ import annotations

from typing import Final

#: First page for every paginated endpoint (the backend is 1-based).
PAGINATION_PAGE: Final[int] = 1

#: Page size used when a screen does not pick its own.
PAGINATION_LIMIT: Final[int] = 10

#: Leaderboard rows shown on the public leaderboard.
LEADERBOARD_LIMIT: Final[int] = 50

#: Config type whose ``charge`` is the price of one SMS.
SMS_CONFIG_TYPE: Final[str] = "SMS"

#: Payment provider the active subscription is looked up under.
PAYMENT_PROVIDER: Final[str] = "STRIPE"

#: Currency for wallet top-ups (lowercase ISO code, as the provider expects).
TOPUP_CURRENCY: Final[str] = "myr"

#: Preset wallet top-up amounts offered on the billing screen.
TOPUP_AMOUNTS: Final[tuple[int, ...]] = (10, 50, 100, 200)

REWARD_TYPE_LABELS: Final[dict[str, str]] = {
    "VOUCHER": "Voucher",
    "CASHBACK": "Cashback",
    "POINT_EXPIRY": "Point expiry",
    "BONUS": "Bonus",
}


def pagination_label(metadata: dict | None) -> str:
    """``"Page 2 of 5 (43 total)"`` from a pagination metadata block.

    Examples:
        >>> pagination_label({"page": 2, "total_pages": 5, "total": 43})
        'Page 2 of 5 (43 total)'
        >>> pagination_label(None)
        ''
    """
    if not metadata:
        return ""
    return (
        f"Page {metadata.get('page', 1)} of {max(metadata.get('total_pages') or 1, 1)}"
        f" ({metadata.get('total', 0)} total)"
    )


def has_previous(metadata: dict | None) -> bool:
    # Some endpoints send has_prev, others has_previous.
    if not metadata:
        return False
    return bool(metadata.get("has_previous", metadata.get("has_prev", False)))


def has_next(metadata: dict | None) -> bool:
    return bool(metadata and metadata.get("has_next"))

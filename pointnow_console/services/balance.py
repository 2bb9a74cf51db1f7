# pointnow_console/services/balance.py
# SPDX-License-Identifier: Apache-2.0
"""
Point-balance resolution for customer payloads.

A customer's balance is per business, but different endpoints put it in
different places:

  1. ``customer_businesses[]``: the entry whose business matches carries
     ``total_points`` (profile and business-detail responses);
  2. top-level ``total_points`` (leaderboard and search responses);
  3. legacy top-level ``points``.

`resolve_points` applies that order and nothing else does. Raw customer
dicts are turned into `CustomerRecord` once, where they enter the console
(`to_customer_record`), so display and gating code read ``record.points``
and never repeat the fallback chain.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final

SOURCE_LEADERBOARD: Final[str] = "leaderboard"
SOURCE_SEARCH: Final[str] = "search"
SOURCE_BUSINESS_DETAIL: Final[str] = "business_detail"
SOURCE_PROFILE: Final[str] = "profile"
SOURCES: Final[frozenset[str]] = frozenset(
    {SOURCE_LEADERBOARD, SOURCE_SEARCH, SOURCE_BUSINESS_DETAIL, SOURCE_PROFILE}
)


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _entry_business_id(entry: Mapping[str, Any]) -> str | None:
    business = entry.get("business")
    if isinstance(business, Mapping) and business.get("id") is not None:
        return str(business["id"])
    if entry.get("business_id") is not None:
        return str(entry["business_id"])
    return None


def business_entry(customer: Mapping[str, Any], business_id: str | None) -> Mapping[str, Any] | None:
    """The ``customer_businesses`` entry for `business_id`, if any."""
    if not business_id:
        return None
    for entry in customer.get("customer_businesses") or []:
        if isinstance(entry, Mapping) and _entry_business_id(entry) == str(business_id):
            return entry
    return None


def resolve_points(customer: Mapping[str, Any], business_id: str | None) -> int:
    """Balance of `customer` at `business_id` (0 when nothing is known).

    Examples:
        >>> c = {"total_points": 999, "customer_businesses": [
        ...     {"business": {"id": "X"}, "total_points": 50}]}
        >>> resolve_points(c, "X")
        50
        >>> resolve_points(c, "Y")
        999
        >>> resolve_points({"points": 7}, "X")
        7
    """
    entry = business_entry(customer, business_id)
    if entry is not None:
        return _as_int(entry.get("total_points"))
    if customer.get("total_points") is not None:
        return _as_int(customer["total_points"])
    if customer.get("points") is not None:
        return _as_int(customer["points"])
    return 0


def resolve_visits(customer: Mapping[str, Any], business_id: str | None) -> int:
    entry = business_entry(customer, business_id)
    if entry is not None:
        return _as_int(entry.get("total_visits"))
    for key in ("total_visits", "visits"):
        if customer.get(key) is not None:
            return _as_int(customer[key])
    return 0


def resolve_last_visit(customer: Mapping[str, Any], business_id: str | None = None) -> str | None:
    entry = business_entry(customer, business_id)
    if entry is not None and entry.get("last_visit_at"):
        return str(entry["last_visit_at"])
    return customer.get("last_visit_at") or customer.get("last_visit") or None


@dataclass(frozen=True)
class CustomerRecord:
    id: str
    name: str
    email: str
    phone_number: str
    points: int
    visits: int
    last_visit_at: str | None
    created_at: str | None
    source: str

    def to_row(self) -> dict[str, Any]:
        """Flat mapping for `st.dataframe`."""
        return {
            "Name": self.name,
            "Email": self.email,
            "Phone": self.phone_number,
            "Points": self.points,
            "Visits": self.visits,
            "Last visit": self.last_visit_at or "",
        }


def to_customer_record(raw: Mapping[str, Any], business_id: str | None, source: str) -> CustomerRecord:
    """Normalize one raw customer payload.

    Raises:
        ValueError: for an unknown `source` tag.
    """
    if source not in SOURCES:
        raise ValueError(f"Unknown customer source: {source!r}")
    return CustomerRecord(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or ""),
        email=str(raw.get("email") or ""),
        phone_number=str(raw.get("phone_number") or ""),
        points=resolve_points(raw, business_id),
        visits=resolve_visits(raw, business_id),
        last_visit_at=resolve_last_visit(raw, business_id),
        created_at=raw.get("created_at"),
        source=source,
    )


def to_customer_records(
    raws: Iterable[Mapping[str, Any]], business_id: str | None, source: str
) -> list[CustomerRecord]:
    return [to_customer_record(r, business_id, source) for r in raws]


def can_redeem(customer: CustomerRecord | Mapping[str, Any], business_id: str | None, reward: Mapping[str, Any]) -> bool:
    """True when the customer's balance covers ``reward["points_cost"]``.

    Inactive rewards are never redeemable.
    """
    if reward.get("is_active") is False:
        return False
    balance = customer.points if isinstance(customer, CustomerRecord) else resolve_points(customer, business_id)
    return balance >= _as_int(reward.get("points_cost"))


def point_delta(balance: int, points: int, *, subtract: bool = False) -> int:
    """Signed ledger amount for adding or deducting `points`.

    Deductions are capped at the current balance, so a customer never goes
    negative.

        >>> point_delta(30, 50, subtract=True)
        -30
    """
    if not subtract:
        return points
    return -min(points, max(balance, 0))

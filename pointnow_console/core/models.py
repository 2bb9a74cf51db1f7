# pointnow_console/core/models.py
# SPDX-License-Identifier: Apache-2.0
"""
Client-side projections of backend entities.

The backend is authoritative for every record here; these dataclasses only
give the console a typed view of the JSON it receives. Only the
authentication records (`User`, `BackendTokens`, `AuthUser`) are built into
objects, because the session store derives role flags from them and persists
them. Catalogue/list payloads (branches, staff, usage caches, ...) stay as the
plain mappings the API returns.

Serialization
-------------
`to_dict()` produces the same shape the backend sends, so a stored session can
be re-hydrated with `from_dict()` after a restart.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

# Role names the backend attaches to a user.
ROLE_ADMIN: Final[str] = "ADMIN"
ROLE_STAFF: Final[str] = "STAFF"
ROLE_USER: Final[str] = "USER"
ROLE_CUSTOMER: Final[str] = "CUSTOMER"
KNOWN_ROLES: Final[frozenset[str]] = frozenset(
    {ROLE_ADMIN, ROLE_STAFF, ROLE_USER, ROLE_CUSTOMER}
)


class RewardType(str, Enum):
    VOUCHER = "VOUCHER"
    CASHBACK = "CASHBACK"
    POINT_EXPIRY = "POINT_EXPIRY"
    BONUS = "BONUS"


class RedemptionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class BusinessLink:
    """An `admin` or `staff` sub-record; only the business it belongs to matters here."""

    business_id: str

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> BusinessLink | None:
        if not raw or raw.get("business_id") in (None, ""):
            return None
        return cls(business_id=str(raw["business_id"]))

    def to_dict(self) -> dict[str, Any]:
        return {"business_id": self.business_id}


@dataclass(frozen=True)
class CustomerProfile:
    name: str
    phone_number: str
    email: str

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> CustomerProfile | None:
        if not raw:
            return None
        return cls(
            name=str(raw.get("name") or ""),
            phone_number=str(raw.get("phone_number") or ""),
            email=str(raw.get("email") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "phone_number": self.phone_number, "email": self.email}


def _role_name(entry: Any) -> str | None:
    # Backend sends [{"role": {"name": "ADMIN"}}]; stored sessions may carry bare names.
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        role = entry.get("role")
        if isinstance(role, Mapping) and role.get("name"):
            return str(role["name"])
        if entry.get("name"):
            return str(entry["name"])
    return None


@dataclass(frozen=True)
class User:
    """Identity record as returned by `/auth/login` and friends."""

    id: str
    email: str
    name: str
    phone_number: str | None = None
    is_active: bool = True
    metadata: dict[str, Any] | None = None
    admin: BusinessLink | None = None
    staff: BusinessLink | None = None
    customer: CustomerProfile | None = None
    user_roles: tuple[str, ...] = ()
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> User:
        """Build a `User` from backend JSON.

        Raises:
            ValueError: if `raw` has no `id`.
        """
        if not isinstance(raw, Mapping) or raw.get("id") in (None, ""):
            raise ValueError("User payload is missing an id")
        roles = tuple(
            name for name in (_role_name(r) for r in raw.get("user_roles") or []) if name
        )
        return cls(
            id=str(raw["id"]),
            email=str(raw.get("email") or ""),
            name=str(raw.get("name") or ""),
            phone_number=raw.get("phone_number"),
            is_active=bool(raw.get("is_active", True)),
            metadata=raw.get("metadata"),
            admin=BusinessLink.from_dict(raw.get("admin")),
            staff=BusinessLink.from_dict(raw.get("staff")),
            customer=CustomerProfile.from_dict(raw.get("customer")),
            user_roles=roles,
            created_at=raw.get("created_at"),
            updated_at=raw.get("updated_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone_number": self.phone_number,
            "is_active": self.is_active,
            "metadata": self.metadata,
            "admin": self.admin.to_dict() if self.admin else None,
            "staff": self.staff.to_dict() if self.staff else None,
            "customer": self.customer.to_dict() if self.customer else None,
            "user_roles": [{"role": {"name": r}} for r in self.user_roles],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class BackendTokens:
    """Opaque credentials. Only `access_token` is ever attached to requests."""

    access_token: str
    refresh_token: str = ""
    expires_in: int = 0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> BackendTokens:
        if not isinstance(raw, Mapping) or not raw.get("access_token"):
            raise ValueError("Token payload is missing an access_token")
        return cls(
            access_token=str(raw["access_token"]),
            refresh_token=str(raw.get("refresh_token") or ""),
            expires_in=int(raw.get("expires_in") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_in": self.expires_in,
        }


@dataclass(frozen=True)
class AuthUser:
    """Session projection of a logged-in user.

    Always build through :meth:`derive`; the role flags and `business_id` are
    computed from the user record and must never be set independently.
    """

    user: User
    tokens: BackendTokens
    roles: tuple[str, ...] = field(default=())
    business_id: str | None = None
    is_admin: bool = False
    is_staff: bool = False
    is_customer: bool = False

    @classmethod
    def derive(cls, user: User, tokens: BackendTokens) -> AuthUser:
        roles = tuple(user.user_roles)
        business_id = None
        if user.admin is not None:
            business_id = user.admin.business_id
        elif user.staff is not None:
            business_id = user.staff.business_id
        return cls(
            user=user,
            tokens=tokens,
            roles=roles,
            business_id=business_id,
            is_admin=ROLE_ADMIN in roles,
            is_staff=ROLE_STAFF in roles,
            is_customer=ROLE_CUSTOMER in roles or ROLE_USER in roles,
        )

    @property
    def can_manage_business(self) -> bool:
        """True for operators (admin or staff) attached to a business."""
        return self.business_id is not None and (
            self.user.admin is not None or self.user.staff is not None
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict(),
            "tokens": self.tokens.to_dict(),
            "roles": list(self.roles),
            "businessId": self.business_id,
            "isAdmin": self.is_admin,
            "isStaff": self.is_staff,
            "isCustomer": self.is_customer,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> AuthUser:
        """Re-hydrate a stored session, re-deriving every flag from the user."""
        return cls.derive(User.from_dict(raw["user"]), BackendTokens.from_dict(raw["tokens"]))


@dataclass(frozen=True)
class PhoneUser:
    """User shape returned by the phone/OTP registration endpoints."""

    id: str
    email: str = ""
    phone_no: str = ""
    guid: str | None = None
    image_url: str | None = None
    last_login: str | None = None
    active: int = 1
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> PhoneUser:
        if not isinstance(raw, Mapping) or raw.get("id") in (None, ""):
            raise ValueError("Phone user payload is missing an id")
        return cls(
            id=str(raw["id"]),
            email=str(raw.get("email") or ""),
            phone_no=str(raw.get("phone_no") or ""),
            guid=raw.get("guid"),
            image_url=raw.get("image_url"),
            last_login=raw.get("last_login"),
            active=int(raw.get("active") or 0),
            created_at=raw.get("created_at"),
            updated_at=raw.get("updated_at"),
        )

# pointnow_console/core/session.py
# SPDX-License-Identifier: Apache-2.0
"""
Authentication session store: the single authority for "who is logged in".

`SessionStore` keeps an in-memory `AuthUser` and mirrors it into a durable
`Storage` under three keys:

  • ``access_token``  — read by the HTTP client for bearer auth
  • ``refresh_token`` — persisted for a future renewal flow (unused today)
  • ``auth-storage``  — JSON blob ``{"user": <AuthUser>, "isAuthenticated": true}``

Invariants
----------
- ``is_authenticated`` implies ``user is not None``; both are replaced together
  inside one locked section, and storage is written in that same section.
- A failed write in `set_auth` restores the previous storage values and
  leaves memory untouched; `clear_auth` always resets memory, even when a
  removal fails.
- Role flags are derived from the user record once, when the session is
  created (`AuthUser.derive`). Nothing else sets them.
- `clear_auth` is idempotent.
- `get_access_token` and `initialize` never raise; an unreadable store yields
  the logged-out baseline.

The store is an ordinary object rather than a module global, so the console
can build one per browser session (`core.clients`) and tests can inject
`MemoryStorage`.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from typing import Any, Final

from .models import (
    ROLE_CUSTOMER,
    AuthUser,
    BackendTokens,
    CustomerProfile,
    PhoneUser,
    User,
)
from .storage import Storage

log = logging.getLogger(__name__)

ACCESS_TOKEN_KEY: Final[str] = "access_token"
REFRESH_TOKEN_KEY: Final[str] = "refresh_token"
AUTH_STORAGE_KEY: Final[str] = "auth-storage"
SESSION_KEYS: Final[tuple[str, ...]] = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, AUTH_STORAGE_KEY)


class SessionError(ValueError):
    """Raised when a login payload cannot be turned into a valid session."""


def user_from_phone_user(phone_user: PhoneUser | Mapping[str, Any]) -> User:
    """Convert an OTP-path user record into the canonical `User` shape.

    Missing display data is filled best-effort: the name is the email's local
    part (or the phone number when there is no email), a customer sub-record
    is synthesized, and the role is forced to ``CUSTOMER``.

    Raises:
        SessionError: when the record has no id, or neither an email nor a
            phone number to identify the user by.
    """
    try:
        pu = phone_user if isinstance(phone_user, PhoneUser) else PhoneUser.from_dict(phone_user)
    except (ValueError, TypeError) as e:
        raise SessionError(f"Cannot build session from phone login: {e}") from e

    email = pu.email.strip()
    phone = pu.phone_no.strip()
    if not email and not phone:
        raise SessionError("Cannot build session from phone login: no email or phone number")

    name = email.split("@", 1)[0] if email else phone
    return User(
        id=pu.id,
        email=email,
        name=name,
        phone_number=phone or None,
        is_active=bool(pu.active),
        metadata={},
        admin=None,
        staff=None,
        customer=CustomerProfile(name=name, phone_number=phone, email=email),
        user_roles=(ROLE_CUSTOMER,),
        created_at=pu.created_at,
        updated_at=pu.updated_at,
    )


class SessionStore:
    """Auth state for one browser session, mirrored into `storage`.

    Args:
      storage: Where tokens and the serialized session live.
      hydrate: Load any stored session immediately (default True).
    """

    def __init__(self, storage: Storage, *, hydrate: bool = True) -> None:
        self._storage = storage
        self._lock = threading.RLock()
        self._user: AuthUser | None = None
        self._authenticated = False
        if hydrate:
            self.initialize()

    # -- read side -------------------------------------------------------------

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def snapshot(self) -> tuple[AuthUser | None, bool]:
        """Return ``(user, is_authenticated)`` as one consistent pair."""
        with self._lock:
            return self._user, self._authenticated

    def get_access_token(self) -> str | None:
        """Stored access token, or None when absent or storage is unavailable."""
        try:
            token = self._storage.get_item(ACCESS_TOKEN_KEY)
        except Exception as e:
            log.warning("Access token lookup failed: %s", e)
            return None
        return token or None

    # -- write side ------------------------------------------------------------

    def set_auth(self, user: User | Mapping[str, Any], tokens: BackendTokens | Mapping[str, Any]) -> AuthUser:
        """Create the session for `user` and persist it.

        Accepts either model objects or the raw JSON mappings from the login
        response (``data.user`` / ``data.backend_tokens``).

        Raises:
            SessionError: if the payloads lack an id or access token.
            OSError: or any other storage error, after the previous session
                has been put back.
        """
        try:
            u = user if isinstance(user, User) else User.from_dict(user)
            t = tokens if isinstance(tokens, BackendTokens) else BackendTokens.from_dict(tokens)
        except (ValueError, TypeError, KeyError) as e:
            raise SessionError(f"Cannot build session: {e}") from e

        auth_user = AuthUser.derive(u, t)
        blob = json.dumps({"user": auth_user.to_dict(), "isAuthenticated": True})
        with self._lock:
            previous = {key: self._storage.get_item(key) for key in SESSION_KEYS}
            try:
                self._storage.set_item(ACCESS_TOKEN_KEY, t.access_token)
                self._storage.set_item(REFRESH_TOKEN_KEY, t.refresh_token)
                self._storage.set_item(AUTH_STORAGE_KEY, blob)
            except Exception:
                log.warning("Session write failed; restoring the previous session")
                self._restore(previous)
                raise
            self._user = auth_user
            self._authenticated = True
        log.info("Session started for user %s (roles=%s)", u.id, ",".join(auth_user.roles))
        return auth_user

    def set_auth_from_phone(
        self,
        phone_user: PhoneUser | Mapping[str, Any],
        token: str,
        refresh_token: str = "",
    ) -> AuthUser:
        """Alternate login path for OTP/phone flows.

        Raises:
            SessionError: if the user record or token cannot form a session.
        """
        if not token:
            raise SessionError("Cannot build session from phone login: missing token")
        user = user_from_phone_user(phone_user)
        return self.set_auth(user, BackendTokens(access_token=token, refresh_token=refresh_token or ""))

    def _restore(self, previous: Mapping[str, str | None]) -> None:
        # Best effort: put back every key, even if one of them fails again.
        for key, value in previous.items():
            try:
                if value is None:
                    self._storage.remove_item(key)
                else:
                    self._storage.set_item(key, value)
            except Exception as e:
                log.error("Could not restore %s after a failed session write: %s", key, e)

    def clear_auth(self) -> None:
        """Forget the session everywhere. Safe to call when already logged out.

        Every key is removed even if an earlier removal fails, and memory is
        reset regardless; the first storage error is re-raised afterwards.
        """
        error: Exception | None = None
        with self._lock:
            try:
                for key in SESSION_KEYS:
                    try:
                        self._storage.remove_item(key)
                    except Exception as e:
                        log.warning("Could not remove %s from storage: %s", key, e)
                        error = error or e
            finally:
                self._user = None
                self._authenticated = False
        log.info("Session cleared")
        if error is not None:
            raise error

    def initialize(self) -> None:
        """Re-hydrate in-memory state from storage.

        Missing, corrupt or half-written records fall back to the logged-out
        baseline instead of raising.
        """
        user: AuthUser | None = None
        try:
            raw = self._storage.get_item(AUTH_STORAGE_KEY)
            if raw:
                parsed = json.loads(raw)
                if parsed.get("isAuthenticated") and parsed.get("user"):
                    user = AuthUser.from_dict(parsed["user"])
        except Exception as e:
            log.warning("Stored session could not be restored: %s", e)
            user = None
        with self._lock:
            self._user = user
            self._authenticated = user is not None

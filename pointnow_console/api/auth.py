# pointnow_console/api/auth.py
# SPDX-License-Identifier: Apache-2.0
"""Authentication endpoints.

Email/password login and business registration answer with
``data.user`` + ``data.backend_tokens`` (feed them to `SessionStore.set_auth`).
The phone/OTP registration endpoints answer with ``data.token``,
``data.refresh_token`` and a differently shaped ``data.user`` (feed those to
`SessionStore.set_auth_from_phone`).
"""

from __future__ import annotations

from typing import Any

from .client import ApiClient


def login(client: ApiClient, email: str, password: str) -> dict[str, Any]:
    return client.post("/auth/login", {"email": email, "password": password})


def login_with_phone(client: ApiClient, phone_number: str) -> dict[str, Any]:
    """Start a phone login; the backend texts an OTP."""
    return client.post("/auth/login/phone_number", {"phone_number": phone_number})


def verify_login_otp(client: ApiClient, otp_code: str) -> dict[str, Any]:
    return client.post("/auth/verify/login/phone_number/otp", {"otp_code": otp_code})


def register_user(
    client: ApiClient,
    email: str,
    password: str,
    phone_number: str,
    *,
    role: str = "USER",
    is_active: bool | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "email": email,
        "password": password,
        "phone_number": phone_number,
        "role": role,
    }
    if is_active is not None:
        payload["is_active"] = is_active
    if metadata is not None:
        payload["metadata"] = metadata
    return client.post("/auth/register", payload)


def register_user_with_phone(
    client: ApiClient, email: str, phone_number: str, *, role: str = "CUSTOMER"
) -> dict[str, Any]:
    return client.post(
        "/auth/register/phone_number",
        {"email": email, "phone_number": phone_number, "role": role},
    )


def verify_register_otp(client: ApiClient, otp_code: str) -> dict[str, Any]:
    return client.post("/auth/verify/register/phone_number/otp", {"otp_code": otp_code})


def register_business(
    client: ApiClient,
    email: str,
    password: str,
    phone_number: str,
    business: dict[str, Any],
    *,
    is_active: bool = True,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Register an ADMIN user together with the business they operate.

    Args:
      business: ``{name, description, address, registration_number?,
        latitude?, longitude?, email?, phone_number?, metadata?, is_active?}``.
    """
    return client.post(
        "/auth/register/business",
        {
            "email": email,
            "password": password,
            "phone_number": phone_number,
            "role": "ADMIN",
            "is_active": is_active,
            "metadata": metadata or {},
            "business": business,
        },
    )


def forgot_password(client: ApiClient, email: str) -> dict[str, Any]:
    return client.post("/auth/forgot-password", {"email": email})


def reset_password(client: ApiClient, token: str, password: str) -> dict[str, Any]:
    return client.post("/auth/reset-password", {"token": token, "password": password})

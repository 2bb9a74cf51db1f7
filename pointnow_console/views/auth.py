# pointnow_console/views/auth.py
# SPDX-License-Identifier: Apache-2.0
"""
Sign-in screen.

Tabs:
  • Business   email/password login, or register a business (ADMIN user)
  • Customer   phone number + OTP login or registration
  • Password   request a reset link, or set a new password with its token

Successful logins hand the backend payload to the session store; the sidebar
then offers the screens for the new role on the next rerun.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import streamlit as st

from pointnow_console.api import auth as auth_api
from pointnow_console.api.errors import ApiClientError
from pointnow_console.core.session import SessionError, SessionStore
from pointnow_console.core.state import NAV_VIEW, PENDING_OTP, reset_business_state
from pointnow_console.services.phone import convert_phone_number
from pointnow_console.services.validation import (
    ValidationError,
    password_problems,
    validate_business_registration,
    validate_email,
    validate_password_reset,
)
from pointnow_console.ui.components import show_api_error
from pointnow_console.ui.keys import k

log = logging.getLogger(__name__)


def start_session(store: SessionStore, response: Mapping[str, Any]) -> None:
    """Create the session from any login/registration response shape.

    ``data.backend_tokens`` marks the email/password shape; ``data.token`` the
    phone registration shape.

    Raises:
        SessionError: when the payload cannot form a session.
    """
    data = response.get("data") or {}
    if data.get("backend_tokens"):
        auth_user = store.set_auth(data.get("user") or {}, data["backend_tokens"])
    elif data.get("token"):
        auth_user = store.set_auth_from_phone(
            data.get("user") or {}, data["token"], data.get("refresh_token") or ""
        )
    else:
        raise SessionError("Login response carried no credentials")
    reset_business_state()
    st.session_state[NAV_VIEW] = "Dashboard" if auth_user.can_manage_business else "Home"


def _finish(store: SessionStore, response: Mapping[str, Any]) -> None:
    try:
        start_session(store, response)
    except SessionError as e:
        log.warning("Unusable login response: %s", e)
        st.error("Login succeeded but the server response was incomplete. Please try again.")
        return
    st.rerun()


def _business_login(ctx: dict) -> None:
    with st.form(k("auth", "login_form")):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", use_container_width=True)
    if not submitted:
        return
    try:
        resp = auth_api.login(ctx["client"], validate_email(email), password)
    except ValidationError as e:
        st.error(str(e))
        return
    except ApiClientError as e:
        show_api_error(e)
        return
    _finish(ctx["store"], resp)


def _business_register(ctx: dict) -> None:
    with st.form(k("auth", "register_business_form")):
        st.markdown("**Account**")
        email = st.text_input("Email")
        phone = st.text_input("Phone number")
        password = st.text_input("Password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        st.markdown("**Business**")
        name = st.text_input("Business name")
        registration_number = st.text_input("Registration number")
        description = st.text_area("Description")
        address = st.text_input("Address")
        lat_col, lng_col = st.columns(2)
        latitude = lat_col.text_input("Latitude")
        longitude = lng_col.text_input("Longitude")
        submitted = st.form_submit_button("Register business", use_container_width=True)
    if not submitted:
        return

    try:
        lat, lng = validate_business_registration(password, confirm, latitude, longitude)
        resp = auth_api.register_business(
            ctx["client"],
            validate_email(email),
            password,
            convert_phone_number(phone),
            {
                "name": name.strip(),
                "registration_number": registration_number.strip(),
                "description": description.strip(),
                "address": address.strip(),
                "latitude": lat,
                "longitude": lng,
                "metadata": {},
                "is_active": True,
            },
        )
    except ValidationError as e:
        st.error(str(e))
        return
    except ApiClientError as e:
        show_api_error(e)
        return
    _finish(ctx["store"], resp)


def _customer_register(ctx: dict) -> None:
    with st.form(k("auth", "register_user_form")):
        email = st.text_input("Email")
        phone = st.text_input("Phone number")
        password = st.text_input("Password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Create account", use_container_width=True)
    if not submitted:
        return
    if password != confirm:
        st.error("Passwords do not match")
        return
    if password_problems(password):
        st.error("Password does not meet requirements")
        return
    try:
        resp = auth_api.register_user(
            ctx["client"], validate_email(email), password, convert_phone_number(phone)
        )
    except ValidationError as e:
        st.error(str(e))
        return
    except ApiClientError as e:
        show_api_error(e)
        return
    _finish(ctx["store"], resp)


def _customer_phone(ctx: dict) -> None:
    client = ctx["client"]
    pending = st.session_state.get(PENDING_OTP)

    if pending:
        st.info(f"We sent a code to {pending['phone_number']}.")
        with st.form(k("auth", "otp_form")):
            code = st.text_input("One-time code", max_chars=6)
            submitted = st.form_submit_button("Verify", use_container_width=True)
        if st.button("Use a different number", key=k("auth", "otp_reset")):
            st.session_state[PENDING_OTP] = None
            st.rerun()
        if not submitted:
            return
        try:
            if pending["flow"] == "register":
                resp = auth_api.verify_register_otp(client, code.strip())
            else:
                resp = auth_api.verify_login_otp(client, code.strip())
        except ApiClientError as e:
            show_api_error(e)
            return
        st.session_state[PENDING_OTP] = None
        _finish(ctx["store"], resp)
        return

    mode = st.radio(
        "I want to",
        ["Log in", "Sign up", "Sign up with a password"],
        horizontal=True,
        key=k("auth", "phone_mode"),
    )
    if mode == "Sign up with a password":
        _customer_register(ctx)
        return
    with st.form(k("auth", "phone_form")):
        phone = st.text_input("Phone number", placeholder="012-345 6789")
        email = st.text_input("Email") if mode == "Sign up" else ""
        submitted = st.form_submit_button("Send code", use_container_width=True)
    if not submitted:
        return

    phone_number = convert_phone_number(phone)
    if not phone_number:
        st.error("Please enter your phone number")
        return
    try:
        if mode == "Sign up":
            auth_api.register_user_with_phone(client, validate_email(email), phone_number)
            flow = "register"
        else:
            auth_api.login_with_phone(client, phone_number)
            flow = "login"
    except ValidationError as e:
        st.error(str(e))
        return
    except ApiClientError as e:
        show_api_error(e)
        return
    st.session_state[PENDING_OTP] = {"phone_number": phone_number, "flow": flow}
    st.rerun()


def _password(ctx: dict) -> None:
    client = ctx["client"]
    st.subheader("Forgot password")
    with st.form(k("auth", "forgot_form")):
        email = st.text_input("Account email")
        sent = st.form_submit_button("Send reset link")
    if sent:
        try:
            auth_api.forgot_password(client, validate_email(email))
            st.success("If that email has an account, a reset link is on its way.")
        except ValidationError as e:
            st.error(str(e))
        except ApiClientError as e:
            show_api_error(e)

    st.subheader("Reset password")
    token = st.query_params.get("token", "")
    with st.form(k("auth", "reset_form")):
        token = st.text_input("Reset token", value=token)
        password = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm new password", type="password")
        reset = st.form_submit_button("Reset password")
    problems = password_problems(password) if password else []
    if problems:
        st.caption("Password needs: " + ", ".join(problems))
    if not reset:
        return
    try:
        validate_password_reset(token.strip(), password, confirm)
        auth_api.reset_password(client, token.strip(), password)
    except ValidationError as e:
        st.error(str(e))
        return
    except ApiClientError as e:
        show_api_error(e)
        return
    st.success("Password updated. You can now log in.")


def render(ctx: dict) -> None:
    st.header("Sign in")
    business_tab, customer_tab, password_tab = st.tabs(["Business", "Customer", "Password"])
    with business_tab:
        mode = st.radio(
            "Business account", ["Log in", "Register a business"], horizontal=True, key=k("auth", "mode")
        )
        if mode == "Log in":
            _business_login(ctx)
        else:
            _business_register(ctx)
    with customer_tab:
        _customer_phone(ctx)
    with password_tab:
        _password(ctx)

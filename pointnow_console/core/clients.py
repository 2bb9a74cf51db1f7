# pointnow_console/core/clients.py
# SPDX-License-Identifier: Apache-2.0
"""
Per-browser-session service factories for the Streamlit console.

`session_services()` returns this browser session's `SessionStore` and the
`ApiClient` that reads bearer tokens from it.

Both objects live in ``st.session_state``, so every browser connected to the
Streamlit server has its own login, the same way each browser keeps its own
localStorage. They survive reruns but not a page reload.

Storage backends:
  * ``memory`` (default): a private `MemoryStorage` per session.
  * ``file``: one `JsonFileStorage` shared by the whole process (cached with
    `@st.cache_resource`). Meant for a single counter device; every browser
    of the process then sees the same login. Each session re-reads the file
    on every rerun so a logout elsewhere takes effect.

Testing:
  * Pass any mutable mapping in place of ``st.session_state`` and an explicit
    `Settings`.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Final

import streamlit as st

from pointnow_console.api.client import ApiClient

from .config import Settings, settings
from .session import SessionStore
from .storage import MemoryStorage, Storage, build_storage

log = logging.getLogger(__name__)

SESSION_STORE: Final[str] = "SESSION_STORE"
API_CLIENT: Final[str] = "API_CLIENT"


def uses_shared_storage(cfg: Settings) -> bool:
    return cfg.STORAGE_BACKEND.strip().lower() != "memory"


@st.cache_resource(show_spinner=False)
def _shared_storage(backend: str, path: str) -> Storage:
    log.info("Shared session storage at %s; all browsers share one login", path)
    return build_storage(backend, path)


def _session_storage(cfg: Settings) -> Storage:
    if uses_shared_storage(cfg):
        return _shared_storage(cfg.STORAGE_BACKEND, cfg.STORAGE_PATH)
    return MemoryStorage()


def session_services(
    state: MutableMapping[str, Any], cfg: Settings = settings
) -> tuple[SessionStore, ApiClient]:
    """Return the ``(store, client)`` pair kept in `state`, creating it once."""
    store = state.get(SESSION_STORE)
    if store is None:
        store = state[SESSION_STORE] = SessionStore(_session_storage(cfg))
        log.debug("Session store created (backend=%s)", cfg.STORAGE_BACKEND)
    elif uses_shared_storage(cfg):
        store.initialize()

    client = state.get(API_CLIENT)
    if client is None:
        if not cfg.API_URL:
            log.warning("POINTNOW_API_URL is not set; every request will fail")
        client = state[API_CLIENT] = ApiClient(
            cfg.API_URL, store.get_access_token, timeout=cfg.API_TIMEOUT
        )
    return store, client


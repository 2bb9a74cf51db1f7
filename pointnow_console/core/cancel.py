# pointnow_console/core/cancel.py
# SPDX-License-Identifier: Apache-2.0
"""
Cancellation handles for in-flight requests.

A view that starts a request passes a `CancellationToken` to the HTTP client.
If the token is cancelled before the response is applied (the operator typed
a new search, switched business, logged out), the client raises
`RequestCancelled` instead of returning data that belongs to a superseded
screen.

`RequestTracker` implements "latest request wins" per logical key:

    tracker = RequestTracker()
    token = tracker.begin("customers:search")   # cancels the previous search
    resp = customers.search(client, ..., cancel_token=token)
"""

from __future__ import annotations

import threading

from pointnow_console.api.errors import RequestCancelled


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled()


class RequestTracker:
    """Hands out one live token per key, cancelling the one it replaces."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._live: dict[str, CancellationToken] = {}

    def begin(self, key: str) -> CancellationToken:
        token = CancellationToken()
        with self._lock:
            previous = self._live.get(key)
            self._live[key] = token
        if previous is not None:
            previous.cancel()
        return token

    def is_current(self, key: str, token: CancellationToken) -> bool:
        with self._lock:
            return self._live.get(key) is token

    def cancel_all(self) -> None:
        with self._lock:
            tokens = list(self._live.values())
            self._live.clear()
        for t in tokens:
            t.cancel()

# pointnow_console/api/errors.py
# SPDX-License-Identifier: Apache-2.0
"""Error taxonomy for calls to the PointNow backend.

Every failure that leaves `ApiClient.request` is an `ApiClientError`:

  • `NetworkError`         — status 0; the server was never reached.
  • `InvalidResponseError` — the body was not JSON (any status).
  • `ApiClientError`       — the server answered with a non-2xx JSON body;
                             `message` is the server's text, shown verbatim,
                             and `errors` maps field names to messages.
  • `RequestCancelled`     — status 0; the caller abandoned the request.
"""

from __future__ import annotations

from typing import Final

NETWORK_STATUS: Final[int] = 0


class ApiClientError(Exception):
    def __init__(
        self,
        message: str,
        status: int,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.errors = errors

    def field_errors(self, name: str) -> list[str]:
        """Messages the server attached to form field `name` (may be empty)."""
        if not self.errors:
            return []
        value = self.errors.get(name) or []
        return [value] if isinstance(value, str) else list(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"


class NetworkError(ApiClientError):
    def __init__(self, message: str = "Network error. Please check your connection.") -> None:
        super().__init__(message, NETWORK_STATUS)


class InvalidResponseError(ApiClientError):
    def __init__(self, status: int, message: str = "Invalid response format from server.") -> None:
        super().__init__(message, status)


class RequestCancelled(ApiClientError):
    def __init__(self) -> None:
        super().__init__("Request was cancelled.", NETWORK_STATUS)

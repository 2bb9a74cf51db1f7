# pointnow_console/api/client.py
# SPDX-License-Identifier: Apache-2.0
"""
HTTP client core: the single funnel every backend call goes through.

Responsibilities
----------------
- Resolve ``base_url + endpoint``.
- Attach ``Authorization: Bearer <token>`` when the token provider (normally
  `SessionStore.get_access_token`) returns one.
- Send ``Content-Type: application/json`` and JSON-encode bodies. Multipart
  uploads (``files=``) are the only exception; `requests` writes their
  boundary header itself.
- Normalize every outcome to either the parsed JSON body or an
  `ApiClientError` (see `api.errors`).

Status handling
---------------
Any 2xx (200 OK and 201 Created alike) is success. The body is parsed as JSON
whatever the status:

  =================  ==========================================================
  body               outcome
  =================  ==========================================================
  empty, 2xx         ``{}``
  empty, non-2xx     ApiClientError(status, "Request failed with status N")
  not JSON           InvalidResponseError(status)
  JSON, 2xx          the parsed body, untouched
  JSON, non-2xx      ApiClientError(status, body["message"], body["errors"])
  =================  ==========================================================

Connection refused, DNS failures and timeouts become `NetworkError`
(status 0), so callers can tell "server said no" from "server unreachable".

The client never mutates session state and performs no schema validation;
resource modules return its result as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

import requests

from .errors import ApiClientError, InvalidResponseError, NetworkError, NETWORK_STATUS

log = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

TokenProvider = Callable[[], "str | None"]


def _query_value(value: Any) -> str:
    # Query strings carry text; booleans follow the backend's "true"/"false".
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def with_query(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Append ``params`` to ``path`` as a query string.

    Keys whose value is None are skipped, so an omitted filter never reaches
    the backend as ``key=``. Insertion order is preserved. When nothing is
    left the path is returned without a ``?``.

    Examples:
        >>> with_query("/customers", {"business_id": "b1", "page": None})
        '/customers?business_id=b1'
        >>> with_query("/business", {})
        '/business'
    """
    pairs = [(k, _query_value(v)) for k, v in (params or {}).items() if v is not None]
    if not pairs:
        return path
    return f"{path}?{urlencode(pairs)}"


class ApiClient:
    """Bearer-authenticated JSON client for the PointNow REST API.

    Args:
      base_url: Backend root, e.g. ``https://api.pointnow.my``. An empty value
        is allowed at construction; each request then fails with status 0.
      token_provider: Zero-argument callable returning the current access
        token or None.
      session: Optional pre-built `requests.Session` (tests inject fakes).
      timeout: Seconds before a request is abandoned as a network error.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self._token_provider = token_provider
        self._session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, extra: Mapping[str, str] | None, *, multipart: bool) -> dict[str, str]:
        headers: dict[str, str] = {} if multipart else {"Content-Type": JSON_CONTENT_TYPE}
        if extra:
            headers.update(extra)
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
        files: Mapping[str, Any] | None = None,
        cancel_token: Any = None,
    ) -> Any:
        """Perform one request and return its parsed JSON body.

        Args:
          method: HTTP verb.
          endpoint: Path relative to the base URL, query string included.
          json: Body object; falsy bodies are not sent.
          headers: Extra headers merged over the defaults.
          files: Multipart parts for uploads.
          cancel_token: Optional `CancellationToken`; when it is cancelled the
            result is discarded and `RequestCancelled` raised.

        Raises:
          ApiClientError: or one of its subclasses, for every failure.
        """
        if not self.base_url:
            raise ApiClientError(
                "API URL is not configured. Please set POINTNOW_API_URL.",
                NETWORK_STATUS,
            )
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        url = f"{self.base_url}{endpoint}"
        kwargs: dict[str, Any] = {
            "headers": self._headers(headers, multipart=files is not None),
            "timeout": self.timeout,
        }
        if files is not None:
            kwargs["files"] = files
        elif json:
            kwargs["json"] = json

        log.debug("%s %s", method, endpoint)
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            log.warning("%s %s failed before a response: %s", method, endpoint, type(e).__name__)
            raise NetworkError() from e

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        return self._handle_response(method, endpoint, response)

    @staticmethod
    def _handle_response(method: str, endpoint: str, response: requests.Response) -> Any:
        status = response.status_code
        ok = 200 <= status < 300

        if not response.content:
            if ok:
                return {}
            log.warning("%s %s -> %s (empty body)", method, endpoint, status)
            raise ApiClientError(f"Request failed with status {status}", status)

        try:
            data = response.json()
        except ValueError:
            log.warning("%s %s -> %s (non-JSON body)", method, endpoint, status)
            raise InvalidResponseError(status) from None

        if ok:
            return data

        message = None
        errors = None
        if isinstance(data, Mapping):
            message = data.get("message")
            errors = data.get("errors") if isinstance(data.get("errors"), Mapping) else None
        log.warning("%s %s -> %s", method, endpoint, status)
        raise ApiClientError(
            str(message) if message else f"Request failed with status {status}",
            status,
            dict(errors) if errors else None,
        )

    # Verb helpers ---------------------------------------------------------------

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, data: Any = None, **kwargs: Any) -> Any:
        return self.request("POST", endpoint, json=data, **kwargs)

    def put(self, endpoint: str, data: Any = None, **kwargs: Any) -> Any:
        return self.request("PUT", endpoint, json=data, **kwargs)

    def patch(self, endpoint: str, data: Any = None, **kwargs: Any) -> Any:
        return self.request("PATCH", endpoint, json=data, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request("DELETE", endpoint, **kwargs)

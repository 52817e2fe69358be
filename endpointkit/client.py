"""Synchronous httpx transport.

Provides ``HttpxClient``, a :class:`~endpointkit._transport.Client`
implementation that sends requests using :mod:`httpx`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from endpointkit.exceptions import RequestError, ServerResponseError
from endpointkit.http import Request

logger = logging.getLogger(__name__)


def _query_value(value: Any) -> Any:
    """Convert a loosely typed query value into something httpx accepts."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return json.dumps(value, separators=(",", ":"))


def _query_params(request: Request) -> list[tuple[str, Any]]:
    return [(name, _query_value(value)) for name, value in request.query]


def _request_headers(
    defaults: dict[str, str], token: str | None, request: Request
) -> dict[str, str]:
    """Merge client defaults, auth, content type and request headers."""
    headers = dict(defaults)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if request.body:
        headers["Content-Type"] = "application/json"
    headers.update(request.headers)
    return headers


def _handle_response(request: Request, response: httpx.Response) -> bytes:
    """Return the response body, raising on non-2xx statuses."""
    logger.debug(
        "%s %s returned HTTP %d",
        request.method.value,
        request.url,
        response.status_code,
    )
    if not response.is_success:
        raise ServerResponseError(
            url=request.url,
            status=response.status_code,
            content=response.content,
        )
    return response.content


class HttpxClient:
    """Synchronous transport backed by :class:`httpx.Client`.

    Usage::

        from endpointkit import HttpxClient

        with HttpxClient("https://api.example.com", token="my-token") as client:
            result = MyEndpoint(name="x").execute(client)

    Args:
        base_url: Base URL that endpoint actions are joined onto.
        token: Optional bearer token sent with every request.
        headers: Default headers sent with every request.
        timeout: HTTP request timeout in seconds. Defaults to 30. Ignored
            when *http* is given.
        http: Optional pre-configured :class:`httpx.Client`. The caller
            remains responsible for closing it.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        http: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url
        self._token: str | None = token
        self._headers: dict[str, str] = dict(headers or {})
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    @property
    def base(self) -> str:
        """Base URL that endpoint actions are joined onto."""
        return self._base_url

    # -- Context manager ----------------------------------------------------

    def __enter__(self) -> HttpxClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool if this client owns it."""
        if self._owns_http:
            self._http.close()

    def set_token(self, token: str | None) -> None:
        """Set (or clear) the bearer token for subsequent requests."""
        self._token = token

    # -- Transport ----------------------------------------------------------

    def send(self, request: Request) -> bytes:
        """Send *request* and return the raw response body.

        Raises:
            RequestError: If the request could not be completed.
            ServerResponseError: If the server returned a non-2xx status.
        """
        logger.info("Sending %s request to %s", request.method.value, request.url)
        try:
            response = self._http.request(
                request.method.value,
                request.url,
                params=_query_params(request),
                content=request.body or None,
                headers=_request_headers(self._headers, self._token, request),
            )
        except httpx.HTTPError as exc:
            raise RequestError(
                url=request.url, method=request.method.value, source=exc
            ) from exc
        return _handle_response(request, response)

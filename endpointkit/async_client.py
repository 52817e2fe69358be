"""Asynchronous httpx transport.

Provides ``AsyncHttpxClient``, an :class:`~endpointkit._transport.AsyncClient`
implementation using :class:`httpx.AsyncClient`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from endpointkit.client import _handle_response, _query_params, _request_headers
from endpointkit.exceptions import RequestError
from endpointkit.http import Request

logger = logging.getLogger(__name__)


class AsyncHttpxClient:
    """Asynchronous transport backed by :class:`httpx.AsyncClient`.

    Usage::

        import asyncio
        from endpointkit import AsyncHttpxClient

        async def main():
            async with AsyncHttpxClient("https://api.example.com") as client:
                result = await MyEndpoint(name="x").execute_async(client)

        asyncio.run(main())

    Args:
        base_url: Base URL that endpoint actions are joined onto.
        token: Optional bearer token sent with every request.
        headers: Default headers sent with every request.
        timeout: HTTP request timeout in seconds. Defaults to 30. Ignored
            when *http* is given.
        http: Optional pre-configured :class:`httpx.AsyncClient`. The caller
            remains responsible for closing it.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url
        self._token: str | None = token
        self._headers: dict[str, str] = dict(headers or {})
        self._owns_http = http is None
        self._http = (
            http if http is not None else httpx.AsyncClient(timeout=timeout)
        )

    @property
    def base(self) -> str:
        """Base URL that endpoint actions are joined onto."""
        return self._base_url

    # -- Context manager ----------------------------------------------------

    async def __aenter__(self) -> AsyncHttpxClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying async connection pool if this client owns it."""
        if self._owns_http:
            await self._http.aclose()

    def set_token(self, token: str | None) -> None:
        """Set (or clear) the bearer token for subsequent requests."""
        self._token = token

    # -- Transport ----------------------------------------------------------

    async def send(self, request: Request) -> bytes:
        """Send *request* and return the raw response body.

        Raises:
            RequestError: If the request could not be completed.
            ServerResponseError: If the server returned a non-2xx status.
        """
        logger.info("Sending %s request to %s", request.method.value, request.url)
        try:
            response = await self._http.request(
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

"""Transport protocol definitions.

Endpoints are executed against any object satisfying one of these
protocols. A transport receives a fully assembled
:class:`~endpointkit.http.Request` and returns the raw response body, or
raises a :class:`~endpointkit.exceptions.ClientError`. Transports must not
mutate or retain the request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from endpointkit.http import Request


class Client(Protocol):
    """Protocol for synchronous transports."""

    @property
    def base(self) -> str: ...

    def send(self, request: Request) -> bytes: ...


class AsyncClient(Protocol):
    """Protocol for asynchronous transports."""

    @property
    def base(self) -> str: ...

    async def send(self, request: Request) -> bytes: ...

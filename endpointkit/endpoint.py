"""The endpoint contract and its execution pipeline.

An :class:`Endpoint` describes a single remote HTTP operation. Concrete
endpoints are pydantic models: their fields are serialized as the JSON
request body, and the class declares the path, method and result type::

    from pydantic import BaseModel, Field

    from endpointkit import Endpoint, HttpxClient, RequestMethod


    class Secret(BaseModel):
        value: str


    class ReadSecret(Endpoint):
        result_type = Secret

        name: str = Field(exclude=True)

        def action(self) -> str:
            return f"v1/secrets/{self.name}"

        def method(self) -> RequestMethod:
            return RequestMethod.GET


    with HttpxClient("https://api.example.com") as client:
        secret = ReadSecret(name="db").execute(client)

Fields marked ``exclude=True`` are left out of the body and can still be
used to build the path or query. Fields cannot be named ``action``,
``method``, ``query`` or ``transform``; those names belong to the endpoint
contract and defining such a field raises ``TypeError``.

Override :meth:`Endpoint.transform` to unwrap a response envelope or to
reject an API-level error before the result is decoded.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict

from endpointkit.enums import RequestMethod, RequestType, ResponseType
from endpointkit.http import Request, build_request, parse_response

if TYPE_CHECKING:
    from endpointkit._transport import AsyncClient, Client

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CONTRACT_METHODS = frozenset({"action", "method", "query", "transform"})


class EmptyEndpointResult(BaseModel):
    """Result type for endpoints whose response carries no data."""


class Wrapper(BaseModel, Generic[T]):
    """Base class for generic response envelopes.

    Subclasses declare where the wrapped result lives::

        class DataWrapper(Wrapper[T], Generic[T]):
            data: T
            request_id: str

    and are passed unparametrized to :meth:`Endpoint.execute_wrapped`,
    which fills in the endpoint's ``result_type``.
    """


class MiddleWare(Protocol):
    """Hook for inspecting or modifying requests and raw responses."""

    def request(self, endpoint: Endpoint, request: Request) -> Request:
        """Return the request to send in place of *request*."""
        ...

    def response(self, endpoint: Endpoint, content: bytes) -> bytes:
        """Return the raw response body to decode in place of *content*."""
        ...


class Endpoint(BaseModel):
    """A remote HTTP operation that can be executed against a client.

    Subclasses must implement :meth:`action` and :meth:`method`, and
    usually set ``result_type``. Endpoint values are immutable and are
    never modified by execution.

    Class attributes:
        request_body_type: How the endpoint is serialized into a body.
        response_body_type: How the response body is interpreted.
        result_type: Type the response is decoded into. Any type pydantic
            can validate from JSON is accepted.
    """

    model_config = ConfigDict(frozen=True)

    request_body_type: ClassVar[RequestType] = RequestType.JSON
    response_body_type: ClassVar[ResponseType] = ResponseType.JSON
    result_type: ClassVar[Any] = EmptyEndpointResult

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        shadowed = sorted(_CONTRACT_METHODS.intersection(cls.model_fields))
        if shadowed:
            raise TypeError(
                f"{cls.__name__} defines fields {shadowed} that shadow "
                "endpoint methods"
            )

    @abstractmethod
    def action(self) -> str:
        """Relative URL path, joined onto the client's base URL."""

    @abstractmethod
    def method(self) -> RequestMethod:
        """HTTP method used when executing this endpoint."""

    def query(self) -> list[tuple[str, Any]]:
        """Ordered query parameters to add to the request."""
        return []

    def transform(self, content: str) -> str:
        """Operate on the raw response text before it is decoded.

        Returning an empty string makes execution return ``None``. Raise
        :class:`~endpointkit.exceptions.ResponseTransformError` (or any
        other ``ClientError``) to fail the execution.
        """
        return content

    # -- Execution ----------------------------------------------------------

    def execute(
        self, client: Client, *, middleware: MiddleWare | None = None
    ) -> Any | None:
        """Execute this endpoint using *client*.

        Returns:
            The decoded ``result_type`` value, or ``None`` if the response
            was empty.

        Raises:
            ClientError: If any stage of the execution fails. Errors raised
                by the client are propagated unchanged.
        """
        request = self._prepare(client.base, middleware)
        return self._finish(client.send(request), middleware, None)

    async def execute_async(
        self, client: AsyncClient, *, middleware: MiddleWare | None = None
    ) -> Any | None:
        """Execute this endpoint using an asynchronous *client*."""
        request = self._prepare(client.base, middleware)
        return self._finish(await client.send(request), middleware, None)

    def execute_wrapped(
        self,
        client: Client,
        wrapper: type[Wrapper[Any]],
        *,
        middleware: MiddleWare | None = None,
    ) -> Any | None:
        """Execute this endpoint, decoding the response into *wrapper*.

        *wrapper* is parametrized with this endpoint's ``result_type``.
        """
        request = self._prepare(client.base, middleware)
        target = wrapper[type(self).result_type]
        return self._finish(client.send(request), middleware, target)

    async def execute_wrapped_async(
        self,
        client: AsyncClient,
        wrapper: type[Wrapper[Any]],
        *,
        middleware: MiddleWare | None = None,
    ) -> Any | None:
        """Asynchronous counterpart of :meth:`execute_wrapped`."""
        request = self._prepare(client.base, middleware)
        target = wrapper[type(self).result_type]
        return self._finish(await client.send(request), middleware, target)

    def _prepare(self, base: str, middleware: MiddleWare | None) -> Request:
        logger.info("Executing endpoint")
        logger.debug("Endpoint: %r", self)
        request = build_request(self, base)
        if middleware is not None:
            request = middleware.request(self, request)
        return request

    def _finish(
        self, content: bytes, middleware: MiddleWare | None, target: Any
    ) -> Any | None:
        if middleware is not None:
            content = middleware.response(self, content)
        return parse_response(self, content, target)

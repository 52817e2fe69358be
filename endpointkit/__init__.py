"""endpointkit: typed descriptions of remote HTTP endpoints.

Declare an endpoint as a pydantic model, then execute it against a
transport to get back a decoded result.

Quick start::

    from endpointkit import Endpoint, HttpxClient, RequestMethod

    class ListUsers(Endpoint):
        result_type = list[User]

        def action(self) -> str:
            return "api/users"

        def method(self) -> RequestMethod:
            return RequestMethod.GET

    with HttpxClient("http://localhost:3000") as client:
        users = ListUsers().execute(client)

For async usage::

    from endpointkit import AsyncHttpxClient

    async def main():
        async with AsyncHttpxClient("http://localhost:3000") as client:
            users = await ListUsers().execute_async(client)
"""

from __future__ import annotations

import logging

from endpointkit._transport import AsyncClient, Client
from endpointkit.async_client import AsyncHttpxClient
from endpointkit.client import HttpxClient
from endpointkit.endpoint import EmptyEndpointResult, Endpoint, MiddleWare, Wrapper
from endpointkit.enums import RequestMethod, RequestType, ResponseType
from endpointkit.exceptions import (
    ClientError,
    DataParseError,
    RequestError,
    ResponseConversionError,
    ResponseParseError,
    ResponseTransformError,
    ServerResponseError,
    UrlParseError,
)
from endpointkit.http import Request

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncClient",
    "AsyncHttpxClient",
    "Client",
    "ClientError",
    "DataParseError",
    "EmptyEndpointResult",
    "Endpoint",
    "HttpxClient",
    "MiddleWare",
    "Request",
    "RequestError",
    "RequestMethod",
    "RequestType",
    "ResponseConversionError",
    "ResponseParseError",
    "ResponseTransformError",
    "ResponseType",
    "ServerResponseError",
    "UrlParseError",
    "Wrapper",
]

__version__ = "0.1.0"

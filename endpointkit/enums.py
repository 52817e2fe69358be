"""Enumerations shared by endpoints and transports."""

from __future__ import annotations

from enum import Enum


class RequestMethod(str, Enum):
    """HTTP verb used when executing an endpoint.

    ``LIST`` is not a standard HTTP method but is used by some APIs
    (e.g. HashiCorp Vault); it is sent to the transport verbatim.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    LIST = "LIST"


class RequestType(str, Enum):
    """Encoding used to serialize an endpoint into a request body."""

    JSON = "JSON"


class ResponseType(str, Enum):
    """Encoding used to interpret a raw response body."""

    JSON = "JSON"

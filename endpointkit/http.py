"""Request construction and response decoding.

These functions implement the two halves of the execution pipeline that
surround a single transport call: turning an endpoint into a
:class:`Request`, and turning the raw response bytes back into the
endpoint's result type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlsplit, urlunsplit

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from endpointkit.enums import RequestMethod, RequestType, ResponseType
from endpointkit.exceptions import (
    DataParseError,
    ResponseConversionError,
    ResponseParseError,
    UrlParseError,
)

if TYPE_CHECKING:
    from endpointkit.endpoint import Endpoint

logger = logging.getLogger(__name__)

# RFC 3986 pchar minus unreserved characters, which quote() never escapes.
_SEGMENT_SAFE = "!$&'()*+,;=:@"

# Serialized bodies that carry no meaningful content.
_EMPTY_BODIES = frozenset({"null", "{}"})

# Action segments that would not name a resource below the base path.
_SKIPPED_SEGMENTS = frozenset({"", ".", ".."})


@dataclass(frozen=True)
class Request:
    """A fully assembled request, ready to be handed to a transport.

    Attributes:
        url: Absolute request URL.
        method: HTTP method.
        query: Ordered query parameters.
        body: Encoded request body; empty when there is nothing to send.
        headers: Extra headers, normally only set by middleware.
    """

    url: str
    method: RequestMethod
    query: list[tuple[str, Any]] = field(default_factory=list)
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


def build_url(base: str, action: str) -> str:
    """Combine a base URL with an endpoint action to form an absolute URL.

    The path of *base* is kept as given. Each ``/``-separated segment of
    *action* is percent-encoded and appended after it, replacing at most
    one trailing ``/`` of the base path. Empty, ``.`` and ``..`` segments
    are skipped, so leading, trailing or doubled separators in *action*
    have no effect and an action can never climb out of the base path.

    Raises:
        UrlParseError: If *base* is not a valid absolute URL.
    """
    logger.info(
        "Building endpoint url from %s base URL and %s action", base, action
    )
    try:
        parts = urlsplit(base)
        # Accessing the port validates it.
        parts.port
    except ValueError as exc:
        raise UrlParseError(base, source=exc) from exc
    if not parts.scheme or not parts.hostname:
        raise UrlParseError(base)

    segments = [
        quote(segment, safe=_SEGMENT_SAFE)
        for segment in action.split("/")
        if segment not in _SKIPPED_SEGMENTS
    ]
    path = parts.path
    if segments:
        path = path.removesuffix("/") + "/" + "/".join(segments)
    elif not path:
        path = "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def build_body(endpoint: Endpoint) -> bytes:
    """Serialize *endpoint* into request body bytes.

    A body that serializes to ``null`` or ``{}`` is sent as an empty body.

    Raises:
        DataParseError: If the endpoint cannot be serialized.
    """
    if endpoint.request_body_type is not RequestType.JSON:
        raise ValueError(
            f"Unsupported request body type: {endpoint.request_body_type!r}"
        )
    try:
        data = endpoint.model_dump_json()
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise DataParseError(source=exc) from exc
    if data in _EMPTY_BODIES:
        return b""
    return data.encode("utf-8")


def build_request(endpoint: Endpoint, base: str) -> Request:
    """Assemble the :class:`Request` for executing *endpoint* against *base*."""
    return Request(
        url=build_url(base, endpoint.action()),
        method=endpoint.method(),
        query=list(endpoint.query()),
        body=build_body(endpoint),
    )


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def parse_response(
    endpoint: Endpoint, content: bytes, target: Any = None
) -> Any | None:
    """Decode a raw response body into the endpoint's result type.

    Args:
        endpoint: The endpoint that produced the response.
        content: Raw response bytes returned by the transport.
        target: Type to decode into. Defaults to the endpoint's
            ``result_type``.

    Returns:
        The decoded result, or ``None`` when the response (before or after
        the endpoint's ``transform`` hook) is empty.

    Raises:
        ResponseConversionError: If *content* is not valid UTF-8.
        ResponseParseError: If the transformed text cannot be decoded.
        ClientError: Anything raised by the endpoint's ``transform`` hook.
    """
    if not content:
        return None
    if endpoint.response_body_type is not ResponseType.JSON:
        raise ValueError(
            f"Unsupported response body type: {endpoint.response_body_type!r}"
        )

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ResponseConversionError(content=content, source=exc) from exc

    logger.info("Parsing JSON result from string")
    logger.debug("Content before transform: %s", text)
    text = endpoint.transform(text)
    logger.debug("Content after transform: %s", text)
    if not text:
        return None

    if target is None:
        target = endpoint.result_type
    try:
        return _adapter(target).validate_json(text)
    except ValidationError as exc:
        raise ResponseParseError(content=text, source=exc) from exc

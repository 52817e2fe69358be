"""Exception classes for endpointkit.

Every failure raised while executing an endpoint derives from
:class:`ClientError`. Each subclass names the stage that failed and keeps
the offending input around so callers can inspect it.
"""

from __future__ import annotations


class ClientError(Exception):
    """Base class for all errors raised while executing an endpoint."""


class UrlParseError(ClientError):
    """Raised when a client's base URL is not a valid absolute URL.

    Attributes:
        url: The base URL string that failed to parse.
        source: The underlying parse error, if any.
    """

    def __init__(self, url: str, *, source: Exception | None = None) -> None:
        super().__init__(f"Error parsing URL {url!r}")
        self.url = url
        self.source = source


class DataParseError(ClientError):
    """Raised when an endpoint cannot be serialized into a request body.

    Attributes:
        source: The underlying serialization error.
    """

    def __init__(self, *, source: Exception) -> None:
        super().__init__(f"Error serializing endpoint data: {source}")
        self.source = source


class RequestError(ClientError):
    """Raised by a transport when the HTTP request could not be completed.

    Attributes:
        url: Absolute URL of the request.
        method: HTTP method of the request.
        source: The underlying transport error.
    """

    def __init__(self, *, url: str, method: str, source: Exception) -> None:
        super().__init__(f"Error sending {method} request to {url}: {source}")
        self.url = url
        self.method = method
        self.source = source


class ServerResponseError(ClientError):
    """Raised by a transport when the server answers with a non-2xx status.

    Attributes:
        url: Absolute URL of the request.
        status: HTTP status code of the response.
        content: Raw response body.
    """

    def __init__(self, *, url: str, status: int, content: bytes) -> None:
        super().__init__(f"Server returned HTTP {status} for {url}")
        self.url = url
        self.status = status
        self.content = content

    def __repr__(self) -> str:
        return (
            f"ServerResponseError(url={self.url!r}, status={self.status}, "
            f"content={self.content!r})"
        )


class ResponseConversionError(ClientError):
    """Raised when a response body is not valid UTF-8 text.

    Attributes:
        content: The raw response bytes.
        source: The underlying decode error.
    """

    def __init__(self, *, content: bytes, source: Exception) -> None:
        super().__init__(f"Error converting response body to text: {source}")
        self.content = content
        self.source = source


class ResponseTransformError(ClientError):
    """Raised by an endpoint's ``transform`` hook to reject a response.

    Typically used when an API reports an error inside an otherwise
    successful HTTP response.

    Attributes:
        message: Human-readable description of the rejection.
        content: The response text that was rejected, if available.
    """

    def __init__(self, message: str, *, content: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.content = content


class ResponseParseError(ClientError):
    """Raised when response text cannot be decoded into the result type.

    Attributes:
        content: The exact text that failed to decode.
        source: The underlying validation error.
    """

    def __init__(self, *, content: str, source: Exception) -> None:
        super().__init__(f"Error parsing response content: {source}")
        self.content = content
        self.source = source

    def __repr__(self) -> str:
        return f"ResponseParseError(content={self.content!r})"

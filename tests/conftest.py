"""Shared endpoints and an in-memory transport for the test suite."""

from __future__ import annotations

import json
from typing import Any

import pytest
from pydantic import BaseModel, Field

from endpointkit import (
    Endpoint,
    Request,
    RequestMethod,
    ResponseTransformError,
)

BASE_URL = "http://host"


class ValueResult(BaseModel):
    value: int


class EmptyEndpoint(Endpoint):
    """GET a/b with no body."""

    def action(self) -> str:
        return "a/b"

    def method(self) -> RequestMethod:
        return RequestMethod.GET


class DataEndpoint(Endpoint):
    result_type = ValueResult

    data: str

    def action(self) -> str:
        return "data"

    def method(self) -> RequestMethod:
        return RequestMethod.POST


class ItemEndpoint(Endpoint):
    """Path and query come from excluded fields."""

    result_type = ValueResult

    item_id: str = Field(exclude=True)
    page: int | None = Field(default=None, exclude=True)

    def action(self) -> str:
        return f"items/{self.item_id}"

    def method(self) -> RequestMethod:
        return RequestMethod.GET

    def query(self) -> list[tuple[str, Any]]:
        params: list[tuple[str, Any]] = []
        if self.page is not None:
            params.append(("page", self.page))
        return params


class EnvelopeEndpoint(Endpoint):
    """Unwraps ``{"ok": ..., "result": ...}`` responses."""

    result_type = ValueResult

    def action(self) -> str:
        return "wrapped"

    def method(self) -> RequestMethod:
        return RequestMethod.GET

    def transform(self, content: str) -> str:
        parsed = json.loads(content)
        if not parsed["ok"]:
            raise ResponseTransformError(parsed["error"], content=content)
        if parsed["result"] is None:
            return ""
        return json.dumps(parsed["result"])


class FakeClient:
    """Transport that records requests and replays a canned response."""

    def __init__(
        self,
        content: bytes = b"",
        *,
        base: str = BASE_URL,
        error: Exception | None = None,
    ) -> None:
        self._base = base
        self.content = content
        self.error = error
        self.requests: list[Request] = []

    @property
    def base(self) -> str:
        return self._base

    def send(self, request: Request) -> bytes:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.content


class FakeAsyncClient(FakeClient):
    async def send(self, request: Request) -> bytes:  # type: ignore[override]
        return FakeClient.send(self, request)


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()

"""Shared fixtures: a fake hitobito server behind ``httpx.MockTransport``."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from hitobito_client import HitobitoClient

BASE_URL = "https://db.scout.ch"
TOKEN = "test-token"


def node(resource_type: str, resource_id: int | str, **attributes: Any) -> dict[str, Any]:
    """Build a raw JSON:API resource node with a string id."""
    return {"id": str(resource_id), "type": resource_type, "attributes": attributes}


class FakeHitobito:
    """Queue of canned responses; records every request it serves."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queue: list[httpx.Response | Exception] = []

    def respond(self, status_code: int = 200, **kwargs: Any) -> None:
        self._queue.append(httpx.Response(status_code, **kwargs))

    def fail(self, exc: Exception) -> None:
        self._queue.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        outcome = self._queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def client(self, base_url: str = BASE_URL, token: str = TOKEN) -> HitobitoClient:
        return HitobitoClient(base_url, token, transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def api() -> FakeHitobito:
    return FakeHitobito()

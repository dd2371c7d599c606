"""Shared fixtures.

The Graph API is never contacted: every client is an `httpx.AsyncClient`
backed by `httpx.MockTransport`, and each request it receives is recorded.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from fb_app_events import sender as sender_module


@pytest.fixture(autouse=True)
def reset_sender_instance(monkeypatch):
    """Every test starts with no process-wide sender."""
    monkeypatch.setattr(sender_module, "_instance", None)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(requests_seen) -> Callable[..., httpx.AsyncClient]:
    """Build a client whose transport answers every request with `status`."""

    def _make(status: int = 200, body: str = "{}") -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return httpx.Response(status, text=body)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make

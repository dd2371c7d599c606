"""Unit tests for fire-and-forget dispatch through the process-wide sender."""

import asyncio
import threading

import httpx
import pytest

from fb_app_events import factory
from fb_app_events import sender as sender_module
from fb_app_events.errors import InvalidOperationError
from fb_app_events.identity import StaticIdentityProvider
from fb_app_events.sender import EventSender, dispatch

APP_ID = "123456789"
CLIENT_TOKEN = "test-client-token"


async def _drain() -> None:
    """Wait for every dispatched task on the current loop."""
    await asyncio.gather(*sender_module._pending_tasks, return_exceptions=True)


def test_dispatch_before_init_fails():
    with pytest.raises(InvalidOperationError):
        dispatch(factory.create_login())


@pytest.mark.asyncio
async def test_dispatch_returns_before_request_completes(requests_seen):
    gate = asyncio.Event()
    finished = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        await gate.wait()
        finished.append(request)
        return httpx.Response(200)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    EventSender(client, APP_ID, CLIENT_TOKEN, StaticIdentityProvider("1234-5678", True))

    assert dispatch(factory.create_screen_view("MainPage")) is None
    assert finished == []

    while not requests_seen:
        await asyncio.sleep(0)
    assert finished == []

    gate.set()
    await _drain()
    assert len(finished) == 1


@pytest.mark.asyncio
async def test_rejection_is_silent_without_callback(make_client, requests_seen):
    EventSender(make_client(400), APP_ID, CLIENT_TOKEN, StaticIdentityProvider())

    dispatch(factory.create_login())
    await _drain()

    assert len(requests_seen) == 1


@pytest.mark.asyncio
async def test_rejection_reaches_on_failure(make_client):
    EventSender(make_client(500), APP_ID, CLIENT_TOKEN, StaticIdentityProvider())
    failures = []
    event = factory.create_login()

    dispatch(event, on_failure=lambda events, error: failures.append((events, error)))
    await _drain()

    assert failures == [((event,), None)]


@pytest.mark.asyncio
async def test_transport_error_reaches_on_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    EventSender(client, APP_ID, CLIENT_TOKEN, StaticIdentityProvider())
    failures = []

    dispatch(factory.create_login(), on_failure=lambda events, error: failures.append(error))
    await _drain()

    assert len(failures) == 1
    assert isinstance(failures[0], httpx.ConnectTimeout)


@pytest.mark.asyncio
async def test_missing_provider_is_reported_not_raised(make_client, requests_seen):
    EventSender(make_client(), APP_ID, CLIENT_TOKEN)
    failures = []

    dispatch(factory.create_login(), on_failure=lambda events, error: failures.append(error))
    await _drain()

    assert requests_seen == []
    assert isinstance(failures[0], InvalidOperationError)


@pytest.mark.asyncio
async def test_success_does_not_call_on_failure(make_client):
    EventSender(make_client(200), APP_ID, CLIENT_TOKEN, StaticIdentityProvider())
    failures = []

    dispatch(factory.create_login(), on_failure=lambda events, error: failures.append(error))
    await _drain()

    assert failures == []


def test_dispatch_from_sync_code_runs_in_background():
    done = threading.Event()
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(400)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    EventSender(client, APP_ID, CLIENT_TOKEN, StaticIdentityProvider())

    dispatch(factory.create_search("socks"), on_failure=lambda events, error: done.set())

    assert done.wait(timeout=5)
    assert len(seen) == 1

"""Send app events to the Graph API activities endpoint.

Key points to understand:

1) One POST per batch
`submit_with_identity()` turns a batch of events into one form-encoded POST.
Nothing is queued, retried or persisted: a batch is sent now or not at all.

2) Three outcomes
- 2xx response          -> True
- any other status      -> False, status and body go to the log
- connection/timeout    -> the httpx exception propagates to the caller

3) Identity
`submit_auto()` asks the configured `AdvertiserIdentityProvider` for the
advertiser id and tracking flag on every call, then delegates to
`submit_with_identity()`.

4) Fire-and-forget
`dispatch()` is for UI handlers that must never wait or fail because of
analytics. It uses the first sender constructed in the process and returns
immediately. The outcome is invisible to the caller unless an `on_failure`
callback is passed; failures are still logged.

Senders are normally built once at startup (see `create_sender()`) and
passed to the code that needs them. `dispatch()` only exists for call sites
that cannot be handed a reference.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from threading import Lock, Thread
from typing import Callable, Optional, Sequence, Union

import httpx

from . import config
from .errors import InvalidArgumentError, InvalidOperationError
from .identity import AdvertiserIdentityProvider, resolve_identity
from .models import Event, IdentitySnapshot, serialize_events

logger = logging.getLogger(__name__)

# Called with the batch and the exception, or None when the endpoint rejected it.
FailureCallback = Callable[[Sequence[Event], Optional[BaseException]], None]

# First sender constructed in this process; used by dispatch().
_instance: Optional["EventSender"] = None
_instance_lock = Lock()


def _register(sender: "EventSender") -> None:
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = sender


def get_instance() -> Optional["EventSender"]:
    """Return the process-wide sender, or None if none was constructed yet."""
    return _instance


class EventSender:
    """Client for the activities endpoint of one Facebook app.

    Args:
        client: Shared `httpx.AsyncClient`. Safe to reuse across concurrent calls.
        app_id: Facebook App ID.
        client_token: Facebook client token.
        identity_provider: Needed only for `submit_auto()` / `dispatch()`.
        base_url, api_version: Graph API location, see `config`.

    Raises:
        InvalidArgumentError: if `client`, `app_id` or `client_token` is missing.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        app_id: str,
        client_token: str,
        identity_provider: Optional[AdvertiserIdentityProvider] = None,
        *,
        base_url: str = config.FB_GRAPH_BASE_URL,
        api_version: str = config.FB_GRAPH_API_VERSION,
    ):
        if client is None:
            raise InvalidArgumentError("client is required.")
        if not app_id:
            raise InvalidArgumentError("app_id is required.")
        if not client_token:
            raise InvalidArgumentError("client_token is required.")

        self.client = client
        self.app_id = app_id
        self._client_token = client_token
        self.identity_provider = identity_provider
        self.url = config.activities_url(app_id, base_url, api_version)

        # Only a fully configured sender may become the process-wide instance.
        _register(self)

    def build_form(self, identity: IdentitySnapshot, events: Sequence[Event]) -> dict[str, str]:
        """Return the form fields for one submission."""
        tracking = identity.form_tracking_flag
        return {
            "event": "CUSTOM_APP_EVENTS",
            "app_id": self.app_id,
            "client_token": self._client_token,
            "advertiser_id": identity.form_advertiser_id,
            "advertiser_tracking_enabled": tracking,
            "application_tracking_enabled": tracking,
            "custom_events": serialize_events(events),
        }

    async def submit_with_identity(
        self,
        advertiser_id: Optional[str],
        tracking_enabled: bool,
        *events: Event,
    ) -> bool:
        """Send `events` using the given advertiser id and tracking flag.

        Returns:
            True on a 2xx response, False on any other status.

        Raises:
            InvalidArgumentError: if no events are given.
            httpx.HTTPError: on connection failures and timeouts.
        """
        if not events:
            raise InvalidArgumentError("At least one event must be provided.")

        identity = IdentitySnapshot(advertiser_id=advertiser_id, tracking_enabled=tracking_enabled)
        resp = await self.client.post(self.url, data=self.build_form(identity, events))

        if not resp.is_success:
            logger.warning("[Sender] Graph API error: %s - %s", resp.status_code, resp.text)
            return False

        logger.debug("[Sender] Sent %d event(s) to %s", len(events), self.url)
        return True

    async def submit_auto(self, *events: Event) -> bool:
        """Resolve identity through the provider, then send `events`.

        Raises:
            InvalidOperationError: if the sender has no identity provider.
            InvalidArgumentError: if no events are given.
            httpx.HTTPError: on connection failures and timeouts.
        """
        if self.identity_provider is None:
            raise InvalidOperationError(
                "An identity provider must be configured to resolve the advertiser id automatically."
            )
        if not events:
            raise InvalidArgumentError("At least one event must be provided.")

        identity = await resolve_identity(self.identity_provider)
        return await self.submit_with_identity(
            identity.form_advertiser_id, identity.tracking_enabled, *events
        )


def create_sender(
    client: Optional[httpx.AsyncClient] = None,
    identity_provider: Optional[AdvertiserIdentityProvider] = None,
) -> EventSender:
    """Build a sender from environment configuration.

    A new `httpx.AsyncClient` with FB_HTTP_TIMEOUT is created when `client` is
    not given; closing it is up to the caller (`await sender.client.aclose()`).
    """
    if client is None:
        client = httpx.AsyncClient(timeout=config.FB_HTTP_TIMEOUT)
    return EventSender(client, config.FB_APP_ID, config.FB_CLIENT_TOKEN, identity_provider)


# --- Fire-and-forget --------------------------------------------------------------
# Tasks scheduled on the caller's loop. Kept here so they are not garbage
# collected before they finish.
_pending_tasks: set[asyncio.Task] = set()

# Private loop used when dispatch() is called from synchronous code.
_loop: Optional[asyncio.AbstractEventLoop] = None
_loop_lock = Lock()


def _background_loop() -> asyncio.AbstractEventLoop:
    global _loop
    with _loop_lock:
        if _loop is None:
            loop = asyncio.new_event_loop()
            Thread(target=loop.run_forever, name="fb-app-events-dispatch", daemon=True).start()
            _loop = loop
        return _loop


def _report_outcome(
    future: Union[asyncio.Future, concurrent.futures.Future],
    events: Sequence[Event],
    on_failure: Optional[FailureCallback],
) -> None:
    if future.cancelled():
        return

    error = future.exception()
    if error is not None:
        logger.warning("[Dispatch] Sending %d event(s) failed: %r", len(events), error)
    elif future.result():
        return

    if on_failure is not None:
        on_failure(events, error)


def dispatch(*events: Event, on_failure: Optional[FailureCallback] = None) -> None:
    """Send `events` through the process-wide sender without waiting.

    Inside a running event loop the submission becomes a task on that loop.
    From synchronous code it runs on a background thread with its own loop,
    and `on_failure` is called on that thread.

    No result, exception or cancellation handle is returned. Pass
    `on_failure` to learn about rejected or failed batches.

    Raises:
        InvalidOperationError: if no EventSender has been constructed yet.
    """
    sender = _instance
    if sender is None:
        raise InvalidOperationError(
            "EventSender not initialized. Construct one (or call create_sender()) at startup."
        )

    def _done(future) -> None:
        _report_outcome(future, events, on_failure)

    coro = sender.submit_auto(*events)
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run_coroutine_threadsafe(coro, _background_loop()).add_done_callback(_done)
        return

    task = loop.create_task(coro)
    _pending_tasks.add(task)
    task.add_done_callback(_pending_tasks.discard)
    task.add_done_callback(_done)

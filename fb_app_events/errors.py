"""Exceptions raised by fb_app_events.

Two kinds of problems are raised here, both at the call boundary:

- InvalidArgumentError: a required value is missing or empty
  (sender credentials, an empty event batch, a blank custom event name).
- InvalidOperationError: the call is valid but the sender is not set up for it
  (automatic identity without a provider, dispatch before any sender exists).

Network failures are NOT wrapped: `httpx.HTTPError` reaches the caller as-is.
A rejected request (non-2xx) is not an exception at all; it is a `False` return.
"""

from __future__ import annotations


class FacebookAppEventsError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(FacebookAppEventsError, ValueError):
    pass


class InvalidOperationError(FacebookAppEventsError, RuntimeError):
    pass

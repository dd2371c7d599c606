"""fb_app_events configuration.

Everything is read from environment variables so the same code runs in an
app shell, a server process or a test run without changes.

Only `create_sender()` and `StaticIdentityProvider.from_config()` read these
values. An `EventSender` built by hand takes its settings as arguments.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# --- Graph API -----------------------------------------------------------------
# Base URL of the Graph API. Override it to point at a local stub.
FB_GRAPH_BASE_URL: str = os.getenv("FB_GRAPH_BASE_URL", "https://graph.facebook.com")

# The activities endpoint is versioned; the wire format below matches v23.0.
FB_GRAPH_API_VERSION: str = os.getenv("FB_GRAPH_API_VERSION", "v23.0")

# --- Credentials ---------------------------------------------------------------
# Empty means "not configured"; create_sender() refuses to build without them.
FB_APP_ID: str = os.getenv("FB_APP_ID", "")
FB_CLIENT_TOKEN: str = os.getenv("FB_CLIENT_TOKEN", "")

# --- HTTP ----------------------------------------------------------------------
# Seconds, applied to the httpx client that create_sender() builds.
FB_HTTP_TIMEOUT: float = float(os.getenv("FB_HTTP_TIMEOUT", "10.0"))

# --- Static identity -------------------------------------------------------------
# Used by StaticIdentityProvider.from_config() when there is no device
# advertising identifier to query (servers, desktop tools).
FB_ADVERTISER_ID: str = os.getenv("FB_ADVERTISER_ID", "")
FB_ADVERTISER_TRACKING_ENABLED: bool = _env_bool("FB_ADVERTISER_TRACKING_ENABLED")


def activities_url(
    app_id: str,
    base_url: str = FB_GRAPH_BASE_URL,
    api_version: str = FB_GRAPH_API_VERSION,
) -> str:
    """Return the app events endpoint, e.g. `https://graph.facebook.com/v23.0/<app>/activities`."""
    return f"{base_url.rstrip('/')}/{api_version}/{app_id}/activities"

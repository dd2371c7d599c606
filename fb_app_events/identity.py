"""Advertiser identity: who is the device, and may we track it?

The sender never talks to a platform SDK itself. It asks an
`AdvertiserIdentityProvider` two questions on every submission:

1) What is the advertising identifier (GAID on Android, IDFA on iOS)?
   `None` when unavailable or when the user opted out.
2) Is ad tracking enabled?

Platform implementations live with the app that embeds this package; the one
chosen at startup is passed to `EventSender`. This module ships the pieces
that are the same everywhere:

- `normalize_advertiser_id()`: the all-zero identifier means "no identifier".
- `StaticIdentityProvider`: fixed values, for servers, desktop tools and tests.
- `SafeIdentityProvider`: turns a failing lookup into the safe default, which
  is what the provider contract promises the sender.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from . import config
from .models import IdentitySnapshot

logger = logging.getLogger(__name__)

# Returned by both platforms when the user limited ad tracking.
ZERO_ADVERTISER_ID = "00000000-0000-0000-0000-000000000000"


@runtime_checkable
class AdvertiserIdentityProvider(Protocol):
    """Platform capability queried by the sender on every automatic submission.

    Both methods must resolve to a safe default (`None` / `False`) instead of
    raising platform errors.
    """

    async def get_advertiser_id(self) -> Optional[str]: ...

    async def is_tracking_enabled(self) -> bool: ...


def normalize_advertiser_id(raw: Optional[str]) -> Optional[str]:
    """Map empty values and the all-zero sentinel to `None`."""
    if raw is None:
        return None
    value = raw.strip()
    if not value or value == ZERO_ADVERTISER_ID:
        return None
    return value


class StaticIdentityProvider:
    """Provider that answers with fixed values."""

    def __init__(self, advertiser_id: Optional[str] = None, tracking_enabled: bool = False):
        self._advertiser_id = normalize_advertiser_id(advertiser_id)
        self._tracking_enabled = tracking_enabled

    @classmethod
    def from_config(cls) -> "StaticIdentityProvider":
        """Build from FB_ADVERTISER_ID / FB_ADVERTISER_TRACKING_ENABLED."""
        return cls(config.FB_ADVERTISER_ID, config.FB_ADVERTISER_TRACKING_ENABLED)

    async def get_advertiser_id(self) -> Optional[str]:
        return self._advertiser_id

    async def is_tracking_enabled(self) -> bool:
        return self._tracking_enabled


class SafeIdentityProvider:
    """Wrap a provider so lookup failures become safe defaults.

    Native lookups can fail for reasons the app cannot fix (missing Play
    services, denied permission prompt). The failure is logged and the
    sender receives `None` / `False`, so the event is still sent, untracked.
    """

    def __init__(self, inner: AdvertiserIdentityProvider):
        self.inner = inner

    async def get_advertiser_id(self) -> Optional[str]:
        try:
            return normalize_advertiser_id(await self.inner.get_advertiser_id())
        except Exception as e:
            logger.warning("[Identity] Advertiser id lookup failed: %s", e)
            return None

    async def is_tracking_enabled(self) -> bool:
        try:
            return bool(await self.inner.is_tracking_enabled())
        except Exception as e:
            logger.warning("[Identity] Tracking status lookup failed: %s", e)
            return False


async def resolve_identity(provider: AdvertiserIdentityProvider) -> IdentitySnapshot:
    """Query `provider` now. Results are not cached between calls."""
    advertiser_id = await provider.get_advertiser_id()
    tracking_enabled = await provider.is_tracking_enabled()
    return IdentitySnapshot(advertiser_id=advertiser_id, tracking_enabled=tracking_enabled)

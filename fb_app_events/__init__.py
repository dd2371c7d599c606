"""Report app events (purchases, cart actions, screen views, ...) to the Facebook Graph API."""

from .errors import FacebookAppEventsError, InvalidArgumentError, InvalidOperationError
from .factory import (
    ADD_TO_CART,
    LOGIN,
    PURCHASE,
    REMOVE_FROM_CART,
    SCREEN_VIEW,
    SEARCH,
    EventPreset,
    create_add_to_cart,
    create_custom,
    create_login,
    create_purchase,
    create_remove_from_cart,
    create_screen_view,
    create_search,
    new_event_id,
)
from .identity import (
    ZERO_ADVERTISER_ID,
    AdvertiserIdentityProvider,
    SafeIdentityProvider,
    StaticIdentityProvider,
    normalize_advertiser_id,
    resolve_identity,
)
from .models import ContentItem, Event, IdentitySnapshot, serialize_events
from .sender import EventSender, create_sender, dispatch, get_instance

__all__ = [
    "ADD_TO_CART",
    "LOGIN",
    "PURCHASE",
    "REMOVE_FROM_CART",
    "SCREEN_VIEW",
    "SEARCH",
    "ZERO_ADVERTISER_ID",
    "AdvertiserIdentityProvider",
    "ContentItem",
    "Event",
    "EventPreset",
    "EventSender",
    "FacebookAppEventsError",
    "IdentitySnapshot",
    "InvalidArgumentError",
    "InvalidOperationError",
    "SafeIdentityProvider",
    "StaticIdentityProvider",
    "create_add_to_cart",
    "create_custom",
    "create_login",
    "create_purchase",
    "create_remove_from_cart",
    "create_screen_view",
    "create_search",
    "create_sender",
    "dispatch",
    "get_instance",
    "new_event_id",
    "normalize_advertiser_id",
    "resolve_identity",
    "serialize_events",
]

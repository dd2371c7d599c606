"""Builders for the standard app events.

Each standard event type is described by a named preset (event name, id
prefix, content type). The `create_*` functions fill an `Event` from a preset
plus the values the caller supplies; the preset values can still be
overridden per call.

Generated ids carry the preset prefix, e.g. `purchase-3f0c...`, which makes
them easy to spot in Events Manager.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict

from .errors import InvalidArgumentError
from .models import ContentItem, Event


class EventPreset(BaseModel):
    """Default name, id prefix and content type for one standard event."""

    model_config = ConfigDict(frozen=True)

    name: str
    id_prefix: str
    content_type: Optional[str] = None


PURCHASE = EventPreset(name="fb_mobile_purchase", id_prefix="purchase-", content_type="product")
ADD_TO_CART = EventPreset(name="fb_mobile_add_to_cart", id_prefix="addtocart-", content_type="product")
REMOVE_FROM_CART = EventPreset(
    name="fb_mobile_remove_from_cart", id_prefix="removefromcart-", content_type="product"
)
SCREEN_VIEW = EventPreset(name="fb_mobile_content_view", id_prefix="screenview-", content_type="screen")
# Login is reported as a completed registration; it has no content.
LOGIN = EventPreset(name="fb_mobile_complete_registration", id_prefix="login-")
SEARCH = EventPreset(name="fb_mobile_search", id_prefix="search-", content_type="search")


def new_event_id(prefix: str = "") -> str:
    """Return a fresh event id: `prefix` followed by a random UUID."""
    return f"{prefix}{uuid4()}"


def create_purchase(
    contents: Iterable[ContentItem],
    total_value: Decimal,
    currency: str,
    *,
    id: Optional[str] = None,
) -> Event:
    """Completed purchase of `contents`, worth `total_value` in `currency`."""
    return Event(
        name=PURCHASE.name,
        id=id or new_event_id(PURCHASE.id_prefix),
        contents=list(contents),
        content_type=PURCHASE.content_type,
        value=total_value,
        currency=currency,
    )


def create_add_to_cart(
    contents: Iterable[ContentItem],
    *,
    id: Optional[str] = None,
    content_type: Optional[str] = ADD_TO_CART.content_type,
    name: str = ADD_TO_CART.name,
) -> Event:
    return Event(
        name=name,
        id=id or new_event_id(ADD_TO_CART.id_prefix),
        contents=list(contents),
        content_type=content_type,
    )


def create_remove_from_cart(
    contents: Iterable[ContentItem],
    *,
    id: Optional[str] = None,
    content_type: Optional[str] = REMOVE_FROM_CART.content_type,
    name: str = REMOVE_FROM_CART.name,
) -> Event:
    return Event(
        name=name,
        id=id or new_event_id(REMOVE_FROM_CART.id_prefix),
        contents=list(contents),
        content_type=content_type,
    )


def create_screen_view(
    screen_name: str,
    *,
    id: Optional[str] = None,
    content_type: Optional[str] = SCREEN_VIEW.content_type,
    name: str = SCREEN_VIEW.name,
) -> Event:
    """Screen view; the screen name becomes the single content item."""
    return Event(
        name=name,
        id=id or new_event_id(SCREEN_VIEW.id_prefix),
        contents=[ContentItem(id=screen_name, quantity=Decimal(1))],
        content_type=content_type,
    )


def create_login(*, id: Optional[str] = None, name: str = LOGIN.name) -> Event:
    return Event(name=name, id=id or new_event_id(LOGIN.id_prefix))


def create_search(
    search_term: str,
    *,
    id: Optional[str] = None,
    content_type: Optional[str] = SEARCH.content_type,
    name: str = SEARCH.name,
) -> Event:
    """Search; the search term becomes the single content item."""
    return Event(
        name=name,
        id=id or new_event_id(SEARCH.id_prefix),
        contents=[ContentItem(id=search_term, quantity=Decimal(1))],
        content_type=content_type,
    )


def create_custom(
    name: str,
    *,
    id: Optional[str] = None,
    content_type: Optional[str] = None,
    contents: Optional[Iterable[ContentItem]] = None,
    value: Optional[Decimal] = None,
    currency: Optional[str] = None,
) -> Event:
    """Event with every field chosen by the caller.

    Raises:
        InvalidArgumentError: if `name` is empty or only whitespace.
    """
    if name is None or not name.strip():
        raise InvalidArgumentError("Event name cannot be empty.")

    return Event(
        name=name,
        id=id or new_event_id(),
        contents=list(contents) if contents is not None else None,
        content_type=content_type,
        value=value,
        currency=currency,
    )

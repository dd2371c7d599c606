"""Pydantic models for app events.

The Graph API `custom_events` field is a JSON array of event objects with
fixed key names (`_eventName`, `event_id`, `fb_content`, ...). Those names are
kept as field aliases so Python code can use readable attribute names while
`to_wire()` produces exactly what the endpoint expects.

Notes:
    - Money and quantities are `Decimal`, never float, so `109.97` stays `109.97`.
    - Absent optional fields are dropped from the wire form, not sent as null.
    - Models are frozen: an event is built once and handed to the sender.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional
from uuid import uuid4

import simplejson
from pydantic import BaseModel, ConfigDict, Field


class ContentItem(BaseModel):
    """One item inside an event: a product, a screen, a search string.

    `id` is whatever the application uses to identify the item (SKU, screen
    name, ...). `quantity` is not checked for positivity.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    quantity: Decimal = Decimal(1)


class Event(BaseModel):
    """A single app event, in the shape the activities endpoint expects.

    Fields:
        name: Event name, e.g. "fb_mobile_purchase". Required, non-empty.
        id: Unique per event instance, used downstream for de-duplication.
            A random UUID if not given.
        contents: Items involved in the event. Optional.
        content_type: "product", "screen", "search", ...  Optional.
        value: Monetary amount. Optional.
        currency: ISO 4217 code for `value`. Optional and not validated here;
            `value` without `currency` is accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="_eventName", min_length=1)
    id: str = Field(alias="event_id", default_factory=lambda: str(uuid4()))
    contents: Optional[list[ContentItem]] = Field(default=None, alias="fb_content")
    content_type: Optional[str] = Field(default=None, alias="fb_content_type")
    value: Optional[Decimal] = Field(default=None, alias="_valueToSum")
    currency: Optional[str] = Field(default=None, alias="fb_currency")

    def to_wire(self) -> dict[str, Any]:
        """Return the wire dict for `custom_events`, absent fields omitted.

        Amounts stay `Decimal`; `serialize_events()` writes them as exact JSON numbers.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


def serialize_events(events: Iterable[Event]) -> str:
    """Serialize a batch into the JSON array text sent as `custom_events`.

    Decimals are written with their exact digits, e.g. `109.97`, never via float.
    """
    return simplejson.dumps(
        [event.to_wire() for event in events],
        separators=(",", ":"),
        use_decimal=True,
    )


class IdentitySnapshot(BaseModel):
    """Advertiser id and tracking consent, resolved fresh for one submission.

    Never cached and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    advertiser_id: Optional[str] = None
    tracking_enabled: bool = False

    @property
    def form_advertiser_id(self) -> str:
        # The endpoint expects an empty string, not a missing field.
        return self.advertiser_id or ""

    @property
    def form_tracking_flag(self) -> str:
        return "1" if self.tracking_enabled else "0"

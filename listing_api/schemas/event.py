"""
Pydantic schemas for property events.

Event payloads are stored as opaque JSON. Known event types are decoded on
demand into a tagged union so that display formatting can rely on typed
fields while unknown or malformed payloads fall back to a generic variant.
"""

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from datetime import datetime
import json

from listing_api.models.property import format_price


class PriceChangedData(BaseModel):
    kind: Literal["price_changed"] = "price_changed"
    old_price: int
    new_price: int


class SoldData(BaseModel):
    kind: Literal["sold"] = "sold"
    sold_price: int
    sold_date: Optional[str] = None


class GenericEventData(BaseModel):
    kind: Literal["generic"] = "generic"
    event_type: str
    raw: Dict[str, Any] = Field(default_factory=dict)


EventPayload = Annotated[
    Union[PriceChangedData, SoldData, GenericEventData],
    Field(discriminator="kind"),
]

_KNOWN_PAYLOADS = {
    "price_changed": PriceChangedData,
    "sold": SoldData,
}


def decode_event_data(event_type: str, data: Any) -> EventPayload:
    """
    Decode a stored payload into its typed variant.

    Payloads that do not match the shape of their event type decode as
    GenericEventData rather than failing.
    """
    raw = data if isinstance(data, dict) else {}
    payload_cls = _KNOWN_PAYLOADS.get(event_type)

    if payload_cls is not None:
        try:
            return payload_cls.model_validate({k: v for k, v in raw.items() if k != "kind"})
        except PydanticValidationError:
            pass

    return GenericEventData(event_type=event_type, raw=raw)


def _format_date(value: Optional[str]) -> str:
    if not value:
        return "an unknown date"
    try:
        parsed = datetime.fromisoformat(value.replace(" UTC", "+00:00").replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.day} {parsed:%b %Y}"


def _humanize(event_type: str) -> str:
    return " ".join(word.capitalize() for word in event_type.replace("-", "_").split("_") if word)


class EventDisplay(BaseModel):
    """Human-readable rendering of an event."""

    label: str = Field(..., examples=["Price Changed"])
    details: str = Field(..., examples=["From $450,000 to $500,000"])


def format_event_data(event_type: str, data: Any) -> EventDisplay:
    """
    Render an event for display.

    Examples:
        price_changed -> "Price Changed" / "From $450,000 to $500,000"
        sold          -> "Sold" / "Sold for $500,000 on 20 Nov 2025"
        other         -> title-cased type / JSON of the payload
    """
    payload = decode_event_data(event_type, data)

    if isinstance(payload, PriceChangedData):
        return EventDisplay(
            label="Price Changed",
            details=f"From {format_price(payload.old_price)} to {format_price(payload.new_price)}",
        )
    if isinstance(payload, SoldData):
        return EventDisplay(
            label="Sold",
            details=f"Sold for {format_price(payload.sold_price)} on {_format_date(payload.sold_date)}",
        )
    return EventDisplay(
        label=_humanize(event_type) or "Event",
        details=json.dumps(payload.raw, sort_keys=True, default=str),
    )


class PropertyEventResponse(BaseModel):
    id: int
    event_type: str
    data: Dict[str, Any]
    created_at: datetime
    display: EventDisplay


class PropertyEventListResponse(BaseModel):
    events: List[PropertyEventResponse]
    count: int

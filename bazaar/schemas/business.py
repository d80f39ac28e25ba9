"""Business view models.

Two distinct shapes are exposed to API consumers:

* ``FullBusinessView`` carries every field, contact details included. It is
  only handed to admins and to the owner of the business.
* ``PublicBusinessView`` is built from an explicit allow-list. Its contact
  fields are typed ``None`` so a redacted view cannot hold a value, and a
  contact field added to the model later stays hidden until it is added to
  the allow-list.
"""
import uuid
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

SOCIAL_NETWORKS = ("instagram", "facebook", "twitter", "linkedin", "youtube", "tiktok")


class DayHours(BaseModel):
    """Opening hours for a single day."""

    open: str | None = None
    close: str | None = None
    closed: bool = False


class SimpleHours(BaseModel):
    """Free-text hours, e.g. "Pazartesi-Cumartesi 09:00-18:00"."""

    kind: Literal["simple"] = "simple"
    text: str


class DetailedHours(BaseModel):
    """Per-day structured hours."""

    kind: Literal["detailed"] = "detailed"
    days: dict[str, DayHours] = {}


WorkingHours = Annotated[Union[SimpleHours, DetailedHours], Field(discriminator="kind")]


def parse_working_hours(raw: Any) -> SimpleHours | DetailedHours | None:
    """
    Convert stored working hours into the tagged variant.

    Accepts the persisted shapes ``{"general": text}`` and
    ``{"detailed": {day: {...}}}``, a bare string, or an already tagged dict.
    Unknown shapes yield ``None``.
    """
    if raw is None or raw == "" or raw == {}:
        return None
    if isinstance(raw, (SimpleHours, DetailedHours)):
        return raw
    if isinstance(raw, str):
        return SimpleHours(text=raw)
    if not isinstance(raw, dict):
        return None

    kind = raw.get("kind")
    if kind == "simple":
        return SimpleHours.model_validate(raw)
    if kind == "detailed":
        return DetailedHours.model_validate(raw)

    if isinstance(raw.get("detailed"), dict):
        days = {
            day: DayHours.model_validate(entry)
            for day, entry in raw["detailed"].items()
            if day in WEEKDAYS and isinstance(entry, dict)
        }
        return DetailedHours(days=days)
    if raw.get("general"):
        return SimpleHours(text=str(raw["general"]))
    return None


def dump_working_hours(hours: SimpleHours | DetailedHours | None) -> dict | None:
    """Convert the tagged variant back into the persisted JSON shape."""
    if hours is None:
        return None
    if isinstance(hours, SimpleHours):
        return {"general": hours.text}
    return {"detailed": {day: entry.model_dump() for day, entry in hours.days.items()}}


class CategoryRef(BaseModel):
    """Category display data joined into business views."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name_tr: str
    name_en: str
    icon: str | None = None
    color: str | None = None


class LocationRef(BaseModel):
    """Location display data joined into business views."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name_tr: str
    name_en: str


class BusinessImageView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    image_url: str
    alt_text: str | None = None
    sort_order: int = 0


class PublicBusinessView(BaseModel):
    """Business as seen by anyone who is neither an admin nor its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name_tr: str
    name_en: str | None = None
    description_tr: str | None = None
    description_en: str | None = None
    category_id: uuid.UUID | None = None
    location_id: uuid.UUID | None = None
    category: CategoryRef | None = None
    location: LocationRef | None = None
    logo_url: str | None = None
    cover_image_url: str | None = None
    working_hours: WorkingHours | None = None
    accepts_online_orders: bool = False
    delivery_available: bool = False
    business_type: str | None = None
    payment_methods: list[str] | None = None
    languages: list[str] | None = None
    established_year: int | None = None
    min_order_amount: float | None = None
    status: str
    images: list[BusinessImageView] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    contact_visible: bool = False

    # Always empty on the public shape
    phone: None = None
    email: None = None
    whatsapp: None = None
    website: None = None
    address: None = None
    shop_number: None = None
    owner_name: None = None
    social_media: None = None

    @field_validator("working_hours", mode="before")
    @classmethod
    def _parse_working_hours(cls, v: Any) -> Any:
        return parse_working_hours(v)


class FullBusinessView(PublicBusinessView):
    """Business with contact details, for admins and the owner."""

    contact_visible: bool = True

    phone: str | None = None
    email: str | None = None
    whatsapp: str | None = None
    website: str | None = None
    address: str | None = None
    shop_number: str | None = None
    owner_name: str | None = None
    social_media: dict[str, str | None] | None = None


BusinessView = FullBusinessView | PublicBusinessView

SENSITIVE_FIELDS = frozenset({
    "phone",
    "email",
    "whatsapp",
    "website",
    "address",
    "shop_number",
    "owner_name",
    "social_media",
})

PUBLIC_FIELDS = frozenset(PublicBusinessView.model_fields) - SENSITIVE_FIELDS - {"contact_visible"}


def load_view(data: dict) -> BusinessView:
    """Rebuild a view from its serialized form (e.g. a cache entry)."""
    if data.get("contact_visible"):
        return FullBusinessView.model_validate(data)
    return PublicBusinessView.model_validate(data)

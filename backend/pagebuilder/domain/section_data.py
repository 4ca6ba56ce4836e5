"""
Typed per-type section payloads.

Each section type has its own pydantic model. On the wire (the ``data`` column
and the JSON API) payloads use camelCase keys; unknown keys are carried
through untouched so an older build never drops what a newer one wrote.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import MalformedData, ValidationFailure
from .section_types import SectionType, StickyBehavior, parse_section_type

logger = logging.getLogger(__name__)


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class SectionData(WireModel):
    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ---------------------------------------------------------------------------
# Nested values
# ---------------------------------------------------------------------------

class NavItem(WireModel):
    name: str
    to: str = ""


class CtaButton(WireModel):
    text: str
    url: str = "#"
    variant: str = "primary"


class LinkButton(WireModel):
    text: str
    url: str = "#"
    icon: Optional[str] = None


class Feature(WireModel):
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None


class GalleryImage(WireModel):
    url: str
    alt: str = ""


class Testimonial(WireModel):
    name: str
    text: str
    rating: int = Field(default=5, ge=0, le=5)
    date: Optional[str] = None


class Offer(WireModel):
    title: str
    description: Optional[str] = None
    price: Optional[str] = None
    valid_until: Optional[str] = None


class Event(WireModel):
    title: str
    date: Optional[str] = None
    time: Optional[str] = None
    description: Optional[str] = None


# ---------------------------------------------------------------------------
# Section payloads
# ---------------------------------------------------------------------------

class NavigationData(SectionData):
    logo: Optional[str] = None
    nav_items: List[NavItem] = Field(default_factory=list)
    show_call_button: bool = False
    call_button_text: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    sticky_behavior: StickyBehavior = StickyBehavior.NONE

    @field_validator("sticky_behavior", mode="before")
    @classmethod
    def _coerce_sticky_behavior(cls, value: Any) -> StickyBehavior:
        if value == "reveal-on-scroll-up":
            return StickyBehavior.REVEAL
        try:
            return StickyBehavior(value)
        except ValueError:
            return StickyBehavior.NONE

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> "NavigationData":
        # Older navigation sections carried a boolean `sticky` flag only
        if "stickyBehavior" not in payload and "sticky_behavior" not in payload:
            if payload.get("sticky") is True:
                payload = {**payload, "stickyBehavior": StickyBehavior.STICKY.value}
        return cls.model_validate(payload)


class HeroData(SectionData):
    headline: Optional[str] = None
    subheadline: Optional[str] = None
    tagline: Optional[str] = None
    special_announcement: Optional[str] = None
    value_props: Optional[List[str]] = None
    show_open_status: bool = False
    open_status_text: Optional[str] = None
    show_locally_owned: bool = False
    locally_owned_text: Optional[str] = None
    background_video: Optional[str] = None
    background_image: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    overlay: Optional[bool] = None
    overlay_opacity: Optional[float] = Field(default=None, ge=0, le=1)
    cta_buttons: Optional[List[CtaButton]] = None


class MenuData(SectionData):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    show_prices: bool = True
    show_descriptions: bool = True
    layout: str = "grid"


class LocationData(SectionData):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    hours_title: Optional[str] = None
    contact_title: Optional[str] = None
    directions_button_text: Optional[str] = None
    show_map: bool = True
    show_hours: bool = True


class ContentData(SectionData):
    title: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    image_position: str = "right"


class FeaturesData(SectionData):
    title: Optional[str] = None
    features: List[Feature] = Field(default_factory=list)


class GalleryData(SectionData):
    title: Optional[str] = None
    columns: int = Field(default=3, ge=1, le=6)
    images: List[GalleryImage] = Field(default_factory=list)


class TestimonialsData(SectionData):
    title: Optional[str] = None
    autoplay: bool = False
    testimonials: List[Testimonial] = Field(default_factory=list)


class CtaData(SectionData):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    logo: Optional[str] = None
    background_color: Optional[str] = None
    button: Optional[LinkButton] = None


class NewsletterData(SectionData):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    placeholder: Optional[str] = None
    button_text: Optional[str] = None


class SpecialOffersData(SectionData):
    title: Optional[str] = None
    offers: List[Offer] = Field(default_factory=list)


class EventsData(SectionData):
    title: Optional[str] = None
    show_calendar: bool = True
    events: List[Event] = Field(default_factory=list)


class FooterData(SectionData):
    logo: Optional[str] = None
    tagline: Optional[str] = None
    background_color: Optional[str] = None
    links: List[LinkButton] = Field(default_factory=list)
    copyright: Optional[str] = None


class UnknownSectionData(SectionData):
    """Payload of a section type this build does not know; kept verbatim."""


DATA_MODELS: Dict[SectionType, Type[SectionData]] = {
    SectionType.NAVIGATION: NavigationData,
    SectionType.HERO: HeroData,
    SectionType.MENU: MenuData,
    SectionType.LOCATION: LocationData,
    SectionType.CONTENT: ContentData,
    SectionType.FEATURES: FeaturesData,
    SectionType.GALLERY: GalleryData,
    SectionType.TESTIMONIALS: TestimonialsData,
    SectionType.CTA: CtaData,
    SectionType.NEWSLETTER: NewsletterData,
    SectionType.SPECIAL_OFFERS: SpecialOffersData,
    SectionType.EVENTS: EventsData,
    SectionType.FOOTER: FooterData,
}

_missing = set(SectionType) - set(DATA_MODELS)
if _missing:
    raise RuntimeError(f"No data model for section types: {sorted(t.value for t in _missing)}")


def data_model_for(type_tag: str) -> Type[SectionData]:
    section_type = parse_section_type(type_tag)
    if section_type is None:
        return UnknownSectionData
    return DATA_MODELS[section_type]


def decode_payload(raw: Any) -> Dict[str, Any]:
    """
    Strictly decode a stored ``data`` value into a dict.

    Accepts JSON text or an already-decoded dict; empty values decode to {}.
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return dict(raw)

    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedData(f"Section data is not valid JSON: {exc}") from exc

    if not isinstance(decoded, dict):
        raise MalformedData(f"Section data must be a JSON object, got {type(decoded).__name__}")
    return decoded


def _build(model: Type[SectionData], payload: Dict[str, Any]) -> SectionData:
    if model is NavigationData:
        return NavigationData.from_wire(payload)
    return model.model_validate(payload)


def validate_section_data(type_tag: str, payload: Dict[str, Any]) -> SectionData:
    """Validate an edited payload; raises ValidationFailure naming the field."""
    model = data_model_for(type_tag)
    try:
        return _build(model, payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationFailure(f"Invalid {type_tag} data: {first['msg']}", field=field) from exc


# Each pass drops at least one entry; the bound only guards pathological payloads.
MAX_SALVAGE_PASSES = 20


class ReadResult(NamedTuple):
    data: SectionData
    clean: bool


def _field_keys(model: Type[SectionData]) -> Dict[str, Tuple[str, ...]]:
    return {
        name: tuple(k for k in (field.alias, name) if k)
        for name, field in model.model_fields.items()
    }


def _payload_key(model: Type[SectionData], payload: Dict[str, Any], key: Any) -> Optional[str]:
    """The payload key an error location points at; errors may name the alias or the field."""
    if key in payload:
        return key
    for keys in _field_keys(model).values():
        if key in keys:
            return next((k for k in keys if k in payload), None)
    return None


def _drop_invalid(model: Type[SectionData], payload: Dict[str, Any], errors: List[Dict[str, Any]]) -> List[str]:
    """
    Remove the entries named by validation errors from ``payload`` in place.

    A bad list item drops that item only; any other bad value drops its
    top-level key. Returns the dropped paths.
    """
    bad_keys = set()
    bad_items: Dict[str, set] = {}

    for error in errors:
        loc = error["loc"]
        key = _payload_key(model, payload, loc[0]) if loc else None
        if key is None:
            continue
        if len(loc) > 1 and isinstance(loc[1], int) and isinstance(payload[key], list):
            bad_items.setdefault(key, set()).add(loc[1])
        else:
            bad_keys.add(key)

    dropped = sorted(bad_keys)
    for key, indexes in bad_items.items():
        if key in bad_keys:
            continue
        payload[key] = [item for index, item in enumerate(payload[key]) if index not in indexes]
        dropped.extend(f"{key}.{index}" for index in sorted(indexes))
    for key in bad_keys:
        del payload[key]

    return dropped


def _unknown_keys_only(model: Type[SectionData], payload: Dict[str, Any]) -> Dict[str, Any]:
    known = {k for keys in _field_keys(model).values() for k in keys}
    return {k: v for k, v in payload.items() if k not in known}


def read_section_data(type_tag: str, raw: Any, *, section_id: Optional[str] = None) -> ReadResult:
    """
    Read-path normalizer: never raises.

    Malformed JSON renders with the type's defaults. A payload that decodes
    but breaks its schema loses only the offending fields or list items;
    valid fields and unknown keys are kept. ``clean`` is False whenever
    anything was dropped, so callers can keep the stored text untouched.
    """
    model = data_model_for(type_tag)

    try:
        payload = decode_payload(raw)
    except MalformedData as exc:
        logger.warning("Section %s (%s): %s; using defaults", section_id, type_tag, exc)
        return ReadResult(model(), clean=False)

    dropped: List[str] = []
    for _ in range(MAX_SALVAGE_PASSES):
        try:
            data = _build(model, payload)
        except ValidationError as exc:
            paths = _drop_invalid(model, payload, exc.errors())
            if not paths:
                break
            dropped.extend(paths)
            continue

        if dropped:
            logger.warning(
                "Section %s (%s): ignoring invalid entries %s; the rest is kept",
                section_id, type_tag, ", ".join(dropped),
            )
        return ReadResult(data, clean=not dropped)

    logger.warning("Section %s (%s) data could not be salvaged; keeping unknown keys only", section_id, type_tag)
    return ReadResult(model.model_validate(_unknown_keys_only(model, payload)), clean=False)


def parse_section_data(type_tag: str, raw: Any, *, section_id: Optional[str] = None) -> SectionData:
    return read_section_data(type_tag, raw, section_id=section_id).data


def serialize_section_data(data: SectionData) -> str:
    return json.dumps(data.to_payload(), ensure_ascii=False)

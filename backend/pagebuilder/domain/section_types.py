from enum import Enum
from typing import Optional


class SectionType(str, Enum):
    NAVIGATION = "navigation"
    HERO = "hero"
    MENU = "menu"
    LOCATION = "location"
    CONTENT = "content"
    FEATURES = "features"
    GALLERY = "gallery"
    TESTIMONIALS = "testimonials"
    CTA = "cta"
    NEWSLETTER = "newsletter"
    SPECIAL_OFFERS = "special-offers"
    EVENTS = "events"
    FOOTER = "footer"


# Types eligible for the footer band; the highest-ordered one wins.
FOOTER_CANDIDATE_TYPES = frozenset({SectionType.CTA, SectionType.FOOTER})


def parse_section_type(value: Optional[str]) -> Optional[SectionType]:
    """
    Map a stored type tag to the closed enum.

    Returns None for tags this version does not know about; such sections are
    kept as-is and render nothing.
    """
    if value is None:
        return None
    try:
        return SectionType(value)
    except ValueError:
        return None


class StickyBehavior(str, Enum):
    NONE = "none"
    STICKY = "sticky"
    REVEAL = "reveal"

"""
Section template registry.

The palette of starting configurations an operator can drop onto a page.
Templates are defined here, at build time, and never change at runtime;
``default_data`` is exposed read-only and copied into every new instance.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from .exceptions import TemplateNotFound
from .section_types import SectionType

CATEGORY_ORDER = (
    "Navigation",
    "Hero",
    "Content",
    "Menu",
    "Media",
    "Social Proof",
    "Contact",
    "CTA",
    "Special",
)


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return copy.copy(value)


@dataclass(frozen=True)
class SectionTemplate:
    id: str
    type: SectionType
    name: str
    description: str
    icon: str
    category: str
    default_data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "default_data", _freeze(dict(self.default_data)))

    def new_data(self) -> Dict[str, Any]:
        """A fresh, fully independent copy of the default payload."""
        return _thaw(self.default_data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "category": self.category,
            "defaultData": self.new_data(),
        }


SECTION_TEMPLATES: tuple = (
    # Navigation
    SectionTemplate(
        id="navigation-header",
        type=SectionType.NAVIGATION,
        name="Navigation Header",
        description="Top navigation bar with logo and menu",
        icon="🧭",
        category="Navigation",
        default_data={
            "logo": "/logo.svg",
            "navItems": [
                {"name": "Menu", "to": "menu"},
                {"name": "Hours & Location", "to": "location"},
                {"name": "Reserve", "to": "reserve"},
            ],
            "showCallButton": True,
            "callButtonText": "Call Now",
            "backgroundColor": "#FBF8EB",
            "textColor": "#144663",
            "stickyBehavior": "sticky",
        },
    ),

    # Hero
    SectionTemplate(
        id="hero-video",
        type=SectionType.HERO,
        name="Video Hero",
        description="Full-screen hero with video background",
        icon="🎬",
        category="Hero",
        default_data={
            "headline": "Come hungry, leave happy",
            "subheadline": "Experience culinary excellence",
            "tagline": "Wood-fired goodness in the heart of town",
            "specialAnnouncement": "Tonight's Special: Half-Price Wings After 8PM",
            "valueProps": [
                "Serving the neighborhood since 2020",
                "4.8 Stars on Google",
                "Kids Eat Free Tuesdays",
                "Happy Hour 5-6PM Daily",
            ],
            "showOpenStatus": True,
            "openStatusText": "Open Now • Closes at 10PM",
            "showLocallyOwned": True,
            "locallyOwnedText": "Locally Owned & Operated",
            "backgroundVideo": "/hero.mp4",
            "overlayOpacity": 0.4,
            "ctaButtons": [
                {"text": "See Menu & Order", "url": "#menu", "variant": "primary"},
                {"text": "Book a Table", "url": "#reserve", "variant": "secondary"},
            ],
        },
    ),
    SectionTemplate(
        id="hero-image",
        type=SectionType.HERO,
        name="Image Hero",
        description="Hero section with background image",
        icon="🖼️",
        category="Hero",
        default_data={
            "headline": "Delicious Food Awaits",
            "subheadline": "Fresh ingredients, amazing flavors",
            "backgroundImage": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4",
            "overlayOpacity": 0.5,
            "ctaButtons": [
                {"text": "Order Now", "url": "#order", "variant": "primary"},
            ],
        },
    ),
    SectionTemplate(
        id="hero-minimal",
        type=SectionType.HERO,
        name="Minimal Hero",
        description="Clean hero with solid background",
        icon="✨",
        category="Hero",
        default_data={
            "headline": "Simple & Elegant",
            "subheadline": "Less is more",
            "backgroundColor": "#144663",
            "textColor": "#ffffff",
            "ctaButtons": [
                {"text": "Get Started", "url": "#start", "variant": "primary"},
            ],
        },
    ),

    # Content
    SectionTemplate(
        id="about-simple",
        type=SectionType.CONTENT,
        name="About Section",
        description="Tell your story",
        icon="📖",
        category="Content",
        default_data={
            "title": "Our Story",
            "content": "<p>Share your restaurant's unique story and what makes you special.</p>",
            "image": "https://images.unsplash.com/photo-1414235077428-338989a2e8c0",
            "imagePosition": "right",
        },
    ),
    SectionTemplate(
        id="features-grid",
        type=SectionType.FEATURES,
        name="Features Grid",
        description="Highlight key features",
        icon="⭐",
        category="Content",
        default_data={
            "title": "Why Choose Us",
            "features": [
                {"icon": "🍴", "title": "Fresh Ingredients", "description": "Locally sourced, always fresh"},
                {"icon": "👨‍🍳", "title": "Expert Chefs", "description": "Award-winning culinary team"},
                {"icon": "🏆", "title": "Best Service", "description": "Exceptional dining experience"},
                {"icon": "🌟", "title": "5-Star Reviews", "description": "Loved by our customers"},
            ],
        },
    ),

    # Menu
    SectionTemplate(
        id="menu-dynamic",
        type=SectionType.MENU,
        name="Dynamic Menu",
        description="Display menu from database",
        icon="🍽️",
        category="Menu",
        default_data={
            "title": "Our Menu",
            "subtitle": "Fresh daily selections",
            "showPrices": True,
            "showDescriptions": True,
            "layout": "grid",
        },
    ),

    # Media
    SectionTemplate(
        id="gallery-grid",
        type=SectionType.GALLERY,
        name="Photo Gallery",
        description="Showcase your best images",
        icon="📸",
        category="Media",
        default_data={
            "title": "Gallery",
            "columns": 3,
            "images": [
                {"url": "https://images.unsplash.com/photo-1552566626-52f8b828add9", "alt": "Restaurant"},
                {"url": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4", "alt": "Interior"},
                {"url": "https://images.unsplash.com/photo-1414235077428-338989a2e8c0", "alt": "Food"},
            ],
        },
    ),

    # Social proof
    SectionTemplate(
        id="testimonials-carousel",
        type=SectionType.TESTIMONIALS,
        name="Testimonials",
        description="Customer reviews carousel",
        icon="💬",
        category="Social Proof",
        default_data={
            "title": "What Our Customers Say",
            "autoplay": True,
            "testimonials": [],
        },
    ),

    # Contact
    SectionTemplate(
        id="location-map",
        type=SectionType.LOCATION,
        name="Location & Hours",
        description="Map and business hours",
        icon="📍",
        category="Contact",
        default_data={
            "title": "Find Us",
            "subtitle": "We're easy to find",
            "showMap": True,
            "showHours": True,
        },
    ),

    # CTA
    SectionTemplate(
        id="cta-simple",
        type=SectionType.CTA,
        name="Call to Action",
        description="Simple CTA section",
        icon="🎯",
        category="CTA",
        default_data={
            "title": "Ready to Dine?",
            "subtitle": "Make your reservation today",
            "backgroundColor": "#144663",
            "button": {"text": "Book Now", "url": "#reserve"},
        },
    ),
    SectionTemplate(
        id="cta-newsletter",
        type=SectionType.NEWSLETTER,
        name="Newsletter Signup",
        description="Email subscription form",
        icon="📧",
        category="CTA",
        default_data={
            "title": "Stay Updated",
            "subtitle": "Get the latest news and special offers",
            "placeholder": "Enter your email",
            "buttonText": "Subscribe",
        },
    ),
    SectionTemplate(
        id="footer-simple",
        type=SectionType.FOOTER,
        name="Footer",
        description="Closing band with links",
        icon="🔚",
        category="CTA",
        default_data={
            "tagline": "Thanks for stopping by",
            "backgroundColor": "#144663",
            "links": [
                {"text": "Menu", "url": "#menu"},
                {"text": "Location", "url": "#location"},
            ],
        },
    ),

    # Special
    SectionTemplate(
        id="special-offers",
        type=SectionType.SPECIAL_OFFERS,
        name="Special Offers",
        description="Display current promotions",
        icon="🎁",
        category="Special",
        default_data={
            "title": "Special Offers",
            "offers": [],
        },
    ),
    SectionTemplate(
        id="events-calendar",
        type=SectionType.EVENTS,
        name="Events Calendar",
        description="Upcoming events",
        icon="📅",
        category="Special",
        default_data={
            "title": "Upcoming Events",
            "showCalendar": True,
        },
    ),
)

_TEMPLATES_BY_ID: Dict[str, SectionTemplate] = {t.id: t for t in SECTION_TEMPLATES}

if len(_TEMPLATES_BY_ID) != len(SECTION_TEMPLATES):
    raise RuntimeError("Duplicate section template ids")


def list_templates() -> List[SectionTemplate]:
    return list(SECTION_TEMPLATES)


def list_templates_by_category() -> Dict[str, List[SectionTemplate]]:
    """
    Group templates for the palette.

    Categories follow CATEGORY_ORDER; a category no template uses is left out.
    """
    grouped: Dict[str, List[SectionTemplate]] = {name: [] for name in CATEGORY_ORDER}

    for template in SECTION_TEMPLATES:
        grouped.setdefault(template.category, []).append(template)

    return {name: templates for name, templates in grouped.items() if templates}


def find_template(template_id: str) -> SectionTemplate:
    try:
        return _TEMPLATES_BY_ID[template_id]
    except KeyError:
        raise TemplateNotFound(template_id) from None

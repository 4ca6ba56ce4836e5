"""
Section type → renderer dispatch.

One table serves both the editor canvas and the public page; the canvas only
adds the edit wrapper around whatever the table produces.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from flask import render_template
from markupsafe import Markup

from pagebuilder.domain.business import full_address, parse_hours, parse_social_media
from pagebuilder.domain.document import SectionInstance
from pagebuilder.domain.section_types import SectionType, parse_section_type

EMPTY = Markup("")


@dataclass(frozen=True)
class RenderContext:
    """The read-only collaborators a renderer may consult."""

    menu_categories: Optional[List[Dict[str, Any]]] = None
    business_info: Optional[Dict[str, Any]] = None


Renderer = Callable[[SectionInstance, RenderContext], Markup]


def _render(template: str, section: SectionInstance, **context: Any) -> Markup:
    return Markup(render_template(template, section=section, data=section.data, **context))


def render_navigation(section: SectionInstance, context: RenderContext) -> Markup:
    phone = (context.business_info or {}).get("phone")
    return _render("sections/navigation.html", section, phone=phone)


def render_hero(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/hero.html", section)


def render_menu(section: SectionInstance, context: RenderContext) -> Markup:
    if context.menu_categories is None:
        return EMPTY
    return _render("sections/menu.html", section, categories=context.menu_categories)


def render_location(section: SectionInstance, context: RenderContext) -> Markup:
    info = context.business_info
    if info is None:
        return EMPTY
    return _render(
        "sections/location.html",
        section,
        info=info,
        address=full_address(info),
        hours=parse_hours(info.get("hours")),
        social_media=parse_social_media(info.get("socialMedia")),
    )


def render_content(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/content.html", section)


def render_features(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/features.html", section)


def render_gallery(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/gallery.html", section)


def render_testimonials(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/testimonials.html", section)


def render_cta(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/cta.html", section)


def render_newsletter(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/newsletter.html", section)


def render_special_offers(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/special_offers.html", section)


def render_events(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/events.html", section)


def render_footer(section: SectionInstance, context: RenderContext) -> Markup:
    return _render("sections/footer.html", section)


RENDERERS: Dict[SectionType, Renderer] = {
    SectionType.NAVIGATION: render_navigation,
    SectionType.HERO: render_hero,
    SectionType.MENU: render_menu,
    SectionType.LOCATION: render_location,
    SectionType.CONTENT: render_content,
    SectionType.FEATURES: render_features,
    SectionType.GALLERY: render_gallery,
    SectionType.TESTIMONIALS: render_testimonials,
    SectionType.CTA: render_cta,
    SectionType.NEWSLETTER: render_newsletter,
    SectionType.SPECIAL_OFFERS: render_special_offers,
    SectionType.EVENTS: render_events,
    SectionType.FOOTER: render_footer,
}

_missing = set(SectionType) - set(RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer for section types: {sorted(t.value for t in _missing)}")


def render_section(
    section: SectionInstance,
    context: RenderContext,
    *,
    editable: bool = False,
    selected: bool = False,
) -> Markup:
    """
    Render one section.

    Public (``editable=False``): hidden sections and unknown types render
    nothing. Canvas (``editable=True``): every section gets the edit wrapper;
    hidden ones are dimmed, unknown types keep an empty body so they can
    still be deleted.
    """
    if not section.is_visible and not editable:
        return EMPTY

    section_type = parse_section_type(section.type)
    body = RENDERERS[section_type](section, context) if section_type is not None else EMPTY

    if not editable:
        return body

    return Markup(
        render_template(
            "builder/section_wrapper.html",
            section=section,
            body=body,
            known_type=section_type is not None,
            selected=selected,
        )
    )

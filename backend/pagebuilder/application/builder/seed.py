from typing import Any, Dict, Optional, Sequence

from flask import current_app

from pagebuilder.domain.document import SectionDocument
from pagebuilder.extensions import db
from pagebuilder.models.page import Page
from pagebuilder.utils.transaction import transactional
from .load_sections import load_document
from .save_sections import save_page_sections

DEFAULT_HOMEPAGE_TEMPLATES = (
    "navigation-header",
    "hero-video",
    "menu-dynamic",
    "testimonials-carousel",
    "location-map",
    "cta-simple",
)


def seed_homepage(
    *,
    title: str = "Home",
    template_ids: Sequence[str] = DEFAULT_HOMEPAGE_TEMPLATES,
    actor_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Make sure a published homepage exists and append the given templates.

    Template ids are validated before anything is written.
    """
    page = Page.query.filter_by(is_homepage=True).first()

    if not page:
        with transactional():
            page = Page()
            page.title = title
            page.slug = current_app.config["HOMEPAGE_SLUG"]
            page.is_homepage = True
            page.is_published = True
            db.session.add(page)

    document: SectionDocument = load_document(page_id=page.id)
    for template_id in template_ids:
        document.insert(template_id)

    result = save_page_sections(page_id=page.id, sections=document.sections, actor_id=actor_id)
    document.mark_saved()
    return result

from typing import List, Optional

from flask import current_app

from pagebuilder.domain.document import SectionDocument, SectionInstance
from pagebuilder.domain.exceptions import PageNotFound
from pagebuilder.models.page import Page
from pagebuilder.models.section import Section
from pagebuilder.normalizers.section import section_to_instance


def get_page(*, page_id: str) -> Page:
    page = Page.query.filter_by(id=page_id).first()
    if not page:
        raise PageNotFound(page_id)
    return page


def get_homepage(*, published_only: bool = True) -> Optional[Page]:
    query = Page.query.filter_by(is_homepage=True)
    if published_only:
        query = query.filter_by(is_published=True)
    return query.first()


def list_page_sections(*, page_id: str) -> List[SectionInstance]:
    """
    All sections of a page as document instances, ascending by order.

    Hidden sections are included; filtering them is the renderer's job.
    """
    get_page(page_id=page_id)

    rows = (
        Section.query
        .filter_by(page_id=page_id)
        .order_by(Section.order.asc())
        .all()
    )
    return [section_to_instance(row) for row in rows]


def load_document(*, page_id: str, history_limit: Optional[int] = None) -> SectionDocument:
    if history_limit is None:
        history_limit = current_app.config["PAGE_BUILDER_HISTORY_LIMIT"]

    return SectionDocument(list_page_sections(page_id=page_id), history_limit=history_limit)

from typing import Iterable, Optional

from pagebuilder.application.business.queries import get_business_info
from pagebuilder.application.menu.queries import get_menu_categories
from pagebuilder.domain.document import SectionInstance
from pagebuilder.rendering.dispatcher import RenderContext
from pagebuilder.rendering.page import render_canvas, render_public_page
from .load_sections import get_homepage, get_page, list_page_sections


def build_render_context() -> RenderContext:
    """Load the read-only collaborators every renderer may consult."""
    return RenderContext(
        menu_categories=get_menu_categories(),
        business_info=get_business_info(),
    )


def render_page_html(*, page_id: str) -> str:
    page = get_page(page_id=page_id)
    return render_public_page(
        list_page_sections(page_id=page.id),
        build_render_context(),
        title=page.title,
    )


def render_homepage_html() -> Optional[str]:
    page = get_homepage(published_only=True)
    if not page:
        return None
    return render_page_html(page_id=page.id)


def render_preview_html(
    *,
    page_id: str,
    sections: Iterable[SectionInstance],
    selected_id: Optional[str] = None,
) -> str:
    """Editor canvas for an unsaved section list."""
    get_page(page_id=page_id)
    return render_canvas(sections, build_render_context(), selected_id=selected_id)

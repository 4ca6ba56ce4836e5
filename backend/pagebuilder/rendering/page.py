from typing import Iterable, Optional

from flask import render_template

from pagebuilder.domain.document import SectionInstance
from pagebuilder.domain.layout import partition
from pagebuilder.rendering.dispatcher import RenderContext, render_section


def render_public_page(
    sections: Iterable[SectionInstance],
    context: RenderContext,
    *,
    title: Optional[str] = None,
) -> str:
    """Partition, then dispatch. Nothing else happens at this boundary."""
    layout = partition(sections)

    return render_template(
        "page.html",
        title=title,
        navigation=render_section(layout.navigation, context) if layout.navigation else None,
        hero=render_section(layout.hero, context) if layout.hero else None,
        content=[render_section(section, context) for section in layout.content],
        footer=render_section(layout.footer, context) if layout.footer else None,
    )


def render_canvas(
    sections: Iterable[SectionInstance],
    context: RenderContext,
    *,
    selected_id: Optional[str] = None,
) -> str:
    """Editor canvas: every section in stored order, wrapped, hidden ones dimmed."""
    ordered = sorted(sections, key=lambda s: s.order)

    return render_template(
        "builder/canvas.html",
        sections=[
            render_section(section, context, editable=True, selected=section.id == selected_id)
            for section in ordered
        ],
    )

from .section import normalize_section

def normalize_page(page, admin=False):
    sections = sorted(page.sections, key=lambda s: s.order)

    if not admin:
        sections = [s for s in sections if s.is_visible]

    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "isHomepage": page.is_homepage,
        "isPublished": page.is_published if admin else None,
        "sections": [
            normalize_section(s, admin=admin)
            for s in sections
        ]
    }

from typing import Any, Dict, Iterable, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from pagebuilder.domain.document import SectionInstance
from pagebuilder.domain.exceptions import PersistenceFailure
from pagebuilder.domain.invariants.sections import assert_sections
from pagebuilder.domain.section_data import serialize_section_data
from pagebuilder.extensions import db
from pagebuilder.models.section import Section
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.transaction import transactional
from .load_sections import get_page


def _apply(row: Section, instance: SectionInstance) -> None:
    row.type = instance.type
    row.name = instance.name
    row.order = instance.order
    row.is_visible = instance.is_visible
    if instance.stored_data is not None:
        row.data = instance.stored_data
    else:
        row.data = serialize_section_data(instance.data)


def save_page_sections(
    *,
    page_id: str,
    sections: Iterable[SectionInstance],
    actor_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Persist a page's full ordered section list in one transaction.

    Responsibilities:
    - Create sections whose id is still client-generated ("section-...")
    - Update persisted sections in place
    - Delete stored sections missing from the list
    - All-or-nothing: any failure rolls the whole batch back

    Last save wins; nothing is merged with concurrent edits. A persisted id
    that no longer exists in storage is re-created under a new id.
    """
    page = get_page(page_id=page_id)

    incoming = sorted(sections, key=lambda s: s.order)
    assert_sections(incoming)

    existing = {row.id: row for row in Section.query.filter_by(page_id=page.id).all()}
    keep_ids = {s.id for s in incoming}

    id_map: Dict[str, str] = {}
    created = updated = deleted = 0

    try:
        with transactional():
            for row_id, row in existing.items():
                if row_id not in keep_ids:
                    db.session.delete(row)
                    deleted += 1

            for instance in incoming:
                row = existing.get(instance.id) if instance.is_persisted else None

                if row is None:
                    row = Section()
                    row.page_id = page.id
                    _apply(row, instance)
                    db.session.add(row)
                    db.session.flush()  # ensures row.id
                    id_map[instance.id] = row.id
                    created += 1
                else:
                    _apply(row, instance)
                    updated += 1

            log_action(
                action="page.sections.save",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor_id,
                payload={"created": created, "updated": updated, "deleted": deleted},
            )
    except SQLAlchemyError as exc:
        current_app.logger.error("Saving sections for page %s failed: %s", page_id, exc)
        raise PersistenceFailure(f"Saving sections for page {page_id} failed; nothing was written") from exc

    current_app.logger.info(
        "Saved sections for page %s: %d created, %d updated, %d deleted",
        page_id, created, updated, deleted,
    )

    return {
        "pageId": page.id,
        "created": created,
        "updated": updated,
        "deleted": deleted,
        "idMap": id_map,
    }

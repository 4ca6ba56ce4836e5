from typing import Any, Dict, List, Optional

from pagebuilder.domain.document import SectionInstance, parse_order
from pagebuilder.domain.exceptions import MalformedData, SectionNotFound, ValidationFailure
from pagebuilder.domain.section_data import decode_payload, serialize_section_data, validate_section_data
from pagebuilder.extensions import db
from pagebuilder.models.section import Section
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.order import compact_order
from pagebuilder.utils.transaction import transactional
from .load_sections import get_page


def _get_section(section_id: str) -> Section:
    section = Section.query.filter_by(id=section_id).first()
    if not section:
        raise SectionNotFound(section_id)
    return section


def _page_sections(page_id: str) -> List[Section]:
    return (
        Section.query
        .filter_by(page_id=page_id)
        .order_by(Section.order.asc())
        .all()
    )


def create_section(
    *,
    page_id: str,
    data: Dict[str, Any],
    actor_id: Optional[str] = None,
) -> Section:
    """
    Append one section to a page.

    The payload is the wire shape (type, name, isVisible, data); it is
    validated against the section type's schema before anything is written.
    """
    page = get_page(page_id=page_id)

    instance = SectionInstance.from_dict({**data, "id": None})
    try:
        payload = decode_payload(data.get("data"))
    except MalformedData as exc:
        raise ValidationFailure(str(exc), field="data") from exc
    section_data = validate_section_data(instance.type, payload)

    with transactional():
        section = Section()
        section.page_id = page.id
        section.type = instance.type
        section.name = instance.name
        section.order = len(_page_sections(page.id))
        section.is_visible = instance.is_visible
        section.data = serialize_section_data(section_data)

        db.session.add(section)
        db.session.flush()

        log_action(
            action="section.create",
            entity_type="section",
            entity_id=section.id,
            actor_id=actor_id,
            payload={"page_id": page.id, "type": section.type, "order": section.order},
        )

    return section


def update_section(
    *,
    section_id: str,
    data: Dict[str, Any],
    actor_id: Optional[str] = None,
) -> Section:
    """
    Update mutable fields of one section.

    Design rules:
    - name, isVisible, order and data are mutable; type is not
    - data replaces the stored payload and is validated for the type
    - an order change re-compacts the page to 0..n-1
    """
    section = _get_section(section_id)
    changed_fields: List[str] = []

    if "type" in data and data["type"] != section.type:
        raise ValidationFailure("Section type cannot be changed", field="type")
    order = parse_order(data["order"]) if "order" in data else None

    with transactional():
        if "name" in data:
            name = (data.get("name") or "").strip()
            if not name:
                raise ValidationFailure("Section name is required", field="name")
            if name != section.name:
                section.name = name
                changed_fields.append("name")

        if "isVisible" in data and bool(data["isVisible"]) != section.is_visible:
            section.is_visible = bool(data["isVisible"])
            changed_fields.append("isVisible")

        if "data" in data:
            payload = data["data"] if isinstance(data["data"], dict) else None
            if payload is None:
                raise ValidationFailure("Section data must be an object", field="data")
            serialized = serialize_section_data(validate_section_data(section.type, payload))
            if serialized != section.data:
                section.data = serialized
                changed_fields.append("data")

        if order is not None and order != section.order:
            siblings = [s for s in _page_sections(section.page_id) if s.id != section.id]
            position = max(0, min(order, len(siblings)))
            siblings.insert(position, section)
            for index, sibling in enumerate(siblings):
                sibling.order = index
            changed_fields.append("order")

        if changed_fields:
            log_action(
                action="section.update",
                entity_type="section",
                entity_id=section.id,
                actor_id=actor_id,
                payload={"fields": changed_fields},
            )

    return section


def delete_section(*, section_id: str, actor_id: Optional[str] = None) -> None:
    """Hard-delete a section and close the order gap it leaves."""
    section = _get_section(section_id)
    page_id = section.page_id

    with transactional():
        db.session.delete(section)
        db.session.flush()

        compact_order(_page_sections(page_id))

        log_action(
            action="section.delete",
            entity_type="section",
            entity_id=section_id,
            actor_id=actor_id,
            payload={"page_id": page_id},
        )


def reorder_sections(
    *,
    page_id: str,
    items: List[Dict[str, Any]],
    actor_id: Optional[str] = None,
) -> List[Section]:
    """
    Apply ``[{id, order}, ...]`` to a page's sections, then re-compact.

    Unknown ids are rejected before anything changes.
    """
    get_page(page_id=page_id)
    sections = {s.id: s for s in _page_sections(page_id)}

    targets: Dict[str, int] = {}
    for item in items:
        if not isinstance(item, dict) or "id" not in item or "order" not in item:
            raise ValidationFailure("Each entry needs an id and an order", field="sections")
        if item["id"] not in sections:
            raise SectionNotFound(item["id"])
        targets[item["id"]] = parse_order(item["order"])

    with transactional():
        for section_id, order in targets.items():
            sections[section_id].order = order

        ordered = compact_order(sections.values())

        log_action(
            action="section.reorder",
            entity_type="page",
            entity_id=page_id,
            actor_id=actor_id,
            payload={"count": len(items)},
        )

    return ordered

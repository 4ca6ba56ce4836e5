"""
In-memory section document for one page's edit session.

The document owns the ordered section list, the current selection and a
bounded undo/redo history. Every mutation validates first and only then
swaps in a new immutable list, so callers never observe a half-applied
change. Order values are kept as the contiguous 0..n-1 sequence matching
list position.
"""
from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pagebuilder.domain.exceptions import MalformedData, SectionNotFound, ValidationFailure
from pagebuilder.domain.history import DEFAULT_HISTORY_LIMIT, History
from pagebuilder.domain.invariants.sections import assert_sections
from pagebuilder.domain.section_data import (
    SectionData,
    data_model_for,
    decode_payload,
    parse_section_data,
    validate_section_data,
)
from pagebuilder.domain.section_types import SectionType, parse_section_type
from pagebuilder.domain.templates import find_template

# Ids with this prefix have never been saved; storage creates rather than updates them.
NEW_SECTION_PREFIX = "section-"

COPY_SUFFIX = " (Copy)"

_id_counter = itertools.count(1)


def new_section_id() -> str:
    return f"{NEW_SECTION_PREFIX}{int(time.time() * 1000)}-{next(_id_counter)}"


def is_persisted_id(section_id: str) -> bool:
    return not section_id.startswith(NEW_SECTION_PREFIX)


def parse_order(value: Any) -> int:
    """Coerce a client-supplied order value; non-integers are a ValidationFailure."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationFailure("Order must be an integer", field="order")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationFailure("Order must be an integer", field="order") from exc


@dataclass(frozen=True)
class SectionInstance:
    id: str
    type: str
    name: str
    order: int
    is_visible: bool
    data: SectionData
    # Stored JSON text that did not read back cleanly; written back verbatim until the data is edited
    stored_data: Optional[str] = None

    @property
    def section_type(self) -> Optional[SectionType]:
        return parse_section_type(self.type)

    @property
    def is_persisted(self) -> bool:
        return is_persisted_id(self.id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "order": self.order,
            "isVisible": self.is_visible,
            "data": self.data.to_payload(),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], *, strict: bool = False) -> "SectionInstance":
        """
        Build an instance from the wire shape.

        ``data`` may be JSON text or a decoded object. On the read path a
        malformed payload yields the type's defaults; with ``strict`` it
        raises ValidationFailure instead.
        """
        section_id = raw.get("id") or new_section_id()
        type_tag = raw.get("type")
        if not type_tag:
            raise ValidationFailure("Section type is required", field="type")

        name = (raw.get("name") or "").strip()
        if not name:
            raise ValidationFailure("Section name is required", field="name")

        is_visible = raw.get("isVisible", raw.get("is_visible", True))

        return cls(
            id=str(section_id),
            type=type_tag,
            name=name,
            order=parse_order(raw.get("order", 0)),
            is_visible=bool(is_visible),
            data=_read_data(type_tag, raw.get("data"), section_id, strict),
        )


def _read_data(type_tag: str, raw: Any, section_id: Any, strict: bool) -> SectionData:
    if not strict:
        return parse_section_data(type_tag, raw, section_id=section_id)
    try:
        payload = decode_payload(raw)
    except MalformedData as exc:
        raise ValidationFailure(str(exc), field="data") from exc
    return validate_section_data(type_tag, payload)


Snapshot = Tuple[SectionInstance, ...]


def _renumber(sections: Iterable[SectionInstance]) -> Snapshot:
    return tuple(
        section if section.order == index else replace(section, order=index)
        for index, section in enumerate(sections)
    )


class SectionDocument:
    def __init__(
        self,
        sections: Iterable[SectionInstance] = (),
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        # stable: equal orders keep their load position
        loaded = _renumber(sorted(sections, key=lambda s: s.order))
        assert_sections(loaded)

        self._sections: Snapshot = loaded
        self._history: History[Snapshot] = History(loaded, limit=history_limit)
        self._selected_id: Optional[str] = None
        self._saved: Snapshot = loaded

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def sections(self) -> Snapshot:
        return self._sections

    def __iter__(self) -> Iterator[SectionInstance]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def get(self, instance_id: str) -> SectionInstance:
        return self._sections[self._index_of(instance_id)]

    def _index_of(self, instance_id: str) -> int:
        for index, section in enumerate(self._sections):
            if section.id == instance_id:
                return index
        raise SectionNotFound(instance_id)

    def snapshot(self) -> Snapshot:
        return self._sections

    def to_payload(self) -> List[Dict[str, Any]]:
        return [section.to_dict() for section in self._sections]

    @property
    def has_changes(self) -> bool:
        return self._sections != self._saved

    def mark_saved(self) -> None:
        self._saved = self._sections

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected(self) -> Optional[SectionInstance]:
        if self._selected_id is None:
            return None
        try:
            return self.get(self._selected_id)
        except SectionNotFound:
            return None

    def select(self, instance_id: str) -> SectionInstance:
        section = self.get(instance_id)
        self._selected_id = section.id
        return section

    def clear_selection(self) -> None:
        self._selected_id = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _commit(self, sections: Iterable[SectionInstance]) -> None:
        updated = _renumber(sections)
        assert_sections(updated)
        self._sections = updated
        self._history.push(updated)

    def insert(self, template_id: str) -> SectionInstance:
        template = find_template(template_id)

        instance = SectionInstance(
            id=new_section_id(),
            type=template.type.value,
            name=template.name,
            order=len(self._sections),
            is_visible=True,
            data=validate_section_data(template.type.value, template.new_data()),
        )
        self._commit(self._sections + (instance,))
        return instance

    def remove(self, instance_id: str) -> None:
        index = self._index_of(instance_id)
        self._commit(self._sections[:index] + self._sections[index + 1:])

        if self._selected_id == instance_id:
            self._selected_id = None

    def duplicate(self, instance_id: str) -> SectionInstance:
        original = self.get(instance_id)

        clone = replace(
            original,
            id=new_section_id(),
            name=f"{original.name}{COPY_SUFFIX}",
            order=len(self._sections),
            data=original.data.model_copy(deep=True),
        )
        self._commit(self._sections + (clone,))
        return clone

    def set_visibility(self, instance_id: str, visible: bool) -> SectionInstance:
        index = self._index_of(instance_id)
        updated = replace(self._sections[index], is_visible=bool(visible))
        self._commit(self._replace_at(index, updated))
        return updated

    def toggle_visibility(self, instance_id: str) -> SectionInstance:
        return self.set_visibility(instance_id, not self.get(instance_id).is_visible)

    def rename(self, instance_id: str, name: str) -> SectionInstance:
        index = self._index_of(instance_id)
        name = (name or "").strip()
        if not name:
            raise ValidationFailure("Section name is required", field="name")

        updated = replace(self._sections[index], name=name)
        self._commit(self._replace_at(index, updated))
        return updated

    def update_data(self, instance_id: str, partial: Mapping[str, Any]) -> SectionInstance:
        """
        Shallow-merge ``partial`` (wire keys; snake_case field names are
        accepted too) into the section's data and re-validate it.
        """
        index = self._index_of(instance_id)
        current = self._sections[index]
        model = data_model_for(current.type)

        merged = current.data.to_payload()
        for key, value in partial.items():
            field = model.model_fields.get(key)
            merged[field.alias if field is not None and field.alias else key] = value

        data = validate_section_data(current.type, merged)
        updated = replace(current, data=data, stored_data=None)
        self._commit(self._replace_at(index, updated))
        return updated

    def reorder(self, instance_id: str, new_index: int) -> SectionInstance:
        index = self._index_of(instance_id)
        new_index = max(0, min(int(new_index), len(self._sections) - 1))
        if new_index == index:
            return self._sections[index]

        moving = self._sections[index]
        remaining = self._sections[:index] + self._sections[index + 1:]
        self._commit(remaining[:new_index] + (moving,) + remaining[new_index:])
        return self._sections[new_index]

    def _replace_at(self, index: int, section: SectionInstance) -> Snapshot:
        return self._sections[:index] + (section,) + self._sections[index + 1:]

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def history_cursor(self) -> int:
        return self._history.cursor

    def undo(self) -> bool:
        snapshot = self._history.undo()
        if snapshot is None:
            return False
        self._sections = snapshot
        return True

    def redo(self) -> bool:
        snapshot = self._history.redo()
        if snapshot is None:
            return False
        self._sections = snapshot
        return True

"""Tests for loading and saving a page's sections."""

import json

import pytest
from sqlalchemy.exc import SQLAlchemyError

from pagebuilder.application.builder import save_sections as save_module
from pagebuilder.application.builder.load_sections import list_page_sections, load_document
from pagebuilder.application.builder.save_sections import save_page_sections
from pagebuilder.domain.exceptions import PageNotFound, PersistenceFailure
from pagebuilder.extensions import db
from pagebuilder.models.activity_log import ActivityLog
from pagebuilder.models.section import Section

from .factories import PageFactory, SectionFactory


class TestLoad:
    """Tests for reading stored sections."""

    def test_sections_come_back_in_order_with_hidden_ones(self, app) -> None:
        page = PageFactory()
        SectionFactory(page=page, order=1, name="Second", is_visible=False)
        SectionFactory(page=page, order=0, name="First")

        sections = list_page_sections(page_id=page.id)

        assert [s.name for s in sections] == ["First", "Second"]
        assert sections[1].is_visible is False

    def test_malformed_row_is_isolated(self, app) -> None:
        page = PageFactory()
        SectionFactory(page=page, order=0, type="gallery", data="{broken")
        SectionFactory(page=page, order=1, type="content", data={"title": "Fine"})

        broken, fine = list_page_sections(page_id=page.id)

        assert broken.data.columns == 3
        assert fine.data.title == "Fine"

    def test_missing_page(self, app) -> None:
        with pytest.raises(PageNotFound):
            list_page_sections(page_id="nope")

    def test_document_uses_configured_history_limit(self, app) -> None:
        app.config["PAGE_BUILDER_HISTORY_LIMIT"] = 2
        page = PageFactory()

        document = load_document(page_id=page.id)
        for _ in range(4):
            document.insert("cta-simple")

        assert document.undo() is True
        assert document.undo() is False


class TestSave:
    """Tests for the atomic batch save."""

    def test_insert_then_save_creates_rows(self, app) -> None:
        page = PageFactory()
        SectionFactory(page=page, order=0, type="hero", data={"headline": "Hi"})

        document = load_document(page_id=page.id)
        new = document.insert("menu-dynamic")

        result = save_page_sections(page_id=page.id, sections=document.sections)

        assert result["created"] == 1
        assert result["updated"] == 1
        assert result["deleted"] == 0
        stored_id = result["idMap"][new.id]
        assert not stored_id.startswith("section-")

        reloaded = list_page_sections(page_id=page.id)
        assert [s.type for s in reloaded] == ["hero", "menu"]
        assert [s.order for s in reloaded] == [0, 1]
        assert reloaded[1].id == stored_id

    def test_sections_missing_from_the_list_are_deleted(self, app) -> None:
        page = PageFactory()
        keep = SectionFactory(page=page, order=0)
        SectionFactory(page=page, order=1)

        document = load_document(page_id=page.id)
        document.remove(document.sections[1].id)

        result = save_page_sections(page_id=page.id, sections=document.sections)

        assert result["deleted"] == 1
        assert [s.id for s in list_page_sections(page_id=page.id)] == [keep.id]

    def test_edits_are_written(self, app) -> None:
        page = PageFactory()
        row = SectionFactory(page=page, order=0, type="content", data={"title": "Old"})

        document = load_document(page_id=page.id)
        document.update_data(row.id, {"title": "New"})
        document.toggle_visibility(row.id)
        save_page_sections(page_id=page.id, sections=document.sections)

        stored = db.session.get(Section, row.id)
        assert json.loads(stored.data)["title"] == "New"
        assert stored.is_visible is False

    def test_unedited_section_with_invalid_entries_is_written_back_unchanged(self, app) -> None:
        page = PageFactory()
        raw = json.dumps({
            "title": "Guests Love Us",
            "testimonials": [
                {"name": "Ann", "text": "Lovely", "rating": 5},
                {"name": "Bob", "text": "Loud", "rating": 7},
            ],
        })
        testimonials = SectionFactory(page=page, order=0, type="testimonials", data=raw)
        content = SectionFactory(page=page, order=1, type="content", data={"title": "Old"})

        document = load_document(page_id=page.id)
        assert document.get(testimonials.id).data.title == "Guests Love Us"

        document.update_data(content.id, {"title": "New"})
        save_page_sections(page_id=page.id, sections=document.sections)

        assert db.session.get(Section, testimonials.id).data == raw
        assert json.loads(db.session.get(Section, content.id).data)["title"] == "New"

    def test_editing_a_salvaged_section_writes_the_valid_part(self, app) -> None:
        page = PageFactory()
        row = SectionFactory(
            page=page,
            order=0,
            type="testimonials",
            data={"title": "Old", "testimonials": [{"name": "Bob", "text": "Loud", "rating": 7}]},
        )

        document = load_document(page_id=page.id)
        document.update_data(row.id, {"title": "New"})
        save_page_sections(page_id=page.id, sections=document.sections)

        stored = json.loads(db.session.get(Section, row.id).data)
        assert stored["title"] == "New"
        assert stored["testimonials"] == []

    def test_vanished_persisted_id_is_recreated(self, app) -> None:
        page = PageFactory()
        document = load_document(page_id=page.id)
        document.insert("cta-simple")
        save_page_sections(page_id=page.id, sections=document.sections)
        saved = load_document(page_id=page.id).sections
        stored_id = saved[0].id

        # another editor deletes the row meanwhile
        db.session.delete(db.session.get(Section, stored_id))
        db.session.commit()

        result = save_page_sections(page_id=page.id, sections=saved)

        assert result["created"] == 1
        assert result["idMap"][stored_id] != stored_id
        assert [s.id for s in list_page_sections(page_id=page.id)] == [result["idMap"][stored_id]]

    def test_failure_rolls_back_everything(self, app, monkeypatch) -> None:
        page = PageFactory()
        SectionFactory(page=page, order=0, name="Original")

        document = load_document(page_id=page.id)
        document.rename(document.sections[0].id, "Renamed")
        document.insert("cta-simple")

        def broken_log_action(**kwargs):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(save_module, "log_action", broken_log_action)

        with pytest.raises(PersistenceFailure):
            save_page_sections(page_id=page.id, sections=document.sections)

        stored = list_page_sections(page_id=page.id)
        assert [s.name for s in stored] == ["Original"]

    def test_save_is_audited(self, app, admin_user) -> None:
        page = PageFactory()
        document = load_document(page_id=page.id)
        document.insert("hero-minimal")

        save_page_sections(page_id=page.id, sections=document.sections, actor_id=admin_user.id)

        log = ActivityLog.query.filter_by(action="page.sections.save").one()
        assert log.entity_id == page.id
        assert log.actor_id == admin_user.id
        assert log.payload["created"] == 1

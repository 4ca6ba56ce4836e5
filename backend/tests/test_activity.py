"""Tests for the admin activity feed."""

from pagebuilder.application.activity.queries import list_recent_activity
from pagebuilder.application.builder.section_crud import create_section
from pagebuilder.normalizers.activity import normalize_activity_log

from .factories import ActivityLogFactory, PageFactory, UserFactory


class TestRecentActivity:
    """Tests for the recent activity query."""

    def test_newest_first_and_capped_at_ten(self, app) -> None:
        logs = [ActivityLogFactory(action=f"action.{n}") for n in range(12)]

        activity = list_recent_activity()

        assert len(activity) == 10
        assert activity[0]["id"] == logs[-1].id
        assert [a["action"] for a in activity[:2]] == ["action.11", "action.10"]

    def test_limit_is_clamped(self, app) -> None:
        for _ in range(3):
            ActivityLogFactory()

        assert len(list_recent_activity(limit=2)) == 2
        assert len(list_recent_activity(limit=0)) == 1

    def test_service_writes_show_up(self, app) -> None:
        page = PageFactory()

        section = create_section(page_id=page.id, data={"type": "content", "name": "About"}, actor_id="u1")

        (entry,) = list_recent_activity()
        assert entry["action"] == "section.create"
        assert entry["entityId"] == section.id
        assert entry["actorId"] == "u1"


class TestNormalizer:
    """Tests for the activity wire shape."""

    def test_keys_are_camel_case(self, app) -> None:
        log = ActivityLogFactory(entity_type="page", entity_id="*", payload={"created": 1})

        assert normalize_activity_log(log) == {
            "id": log.id,
            "actorId": None,
            "action": "section.update",
            "entityType": "page",
            "entityId": "*",
            "payload": {"created": 1},
            "createdAt": log.created_at.isoformat(),
        }


class TestActivityApi:
    """Tests for GET /admin/activity."""

    def test_requires_token(self, client) -> None:
        assert client.get("/api/v1/admin/activity").status_code == 401

    def test_editor_is_forbidden(self, client, app) -> None:
        UserFactory(email="editor@example.com", role="editor")
        login = client.post("/api/v1/auth/login", json={"email": "editor@example.com", "password": "secret123"})
        token = login.get_json()["access_token"]

        response = client.get("/api/v1/admin/activity", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_lists_recent_entries(self, client, auth_headers) -> None:
        older = ActivityLogFactory(action="menu.item.create")
        newer = ActivityLogFactory(action="page.sections.save")

        response = client.get("/api/v1/admin/activity?limit=5", headers=auth_headers)

        assert response.status_code == 200
        assert [a["id"] for a in response.get_json()["activity"]] == [newer.id, older.id]

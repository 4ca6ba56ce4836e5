"""Tests for the HTTP surface."""

from pagebuilder.models.section import Section

from .factories import BusinessInfoFactory, MenuCategoryFactory, MenuItemFactory, PageFactory, SectionFactory, UserFactory


class TestAuth:
    """Tests for login and role checks."""

    def test_login_issues_token(self, client, admin_user) -> None:
        response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.get_json()["access_token"]

    def test_wrong_password(self, client, admin_user) -> None:
        response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "nope"})

        assert response.status_code == 401

    def test_builder_requires_token(self, client) -> None:
        assert client.get("/api/v1/builder/templates").status_code == 401

    def test_viewer_role_is_forbidden(self, client, app) -> None:
        UserFactory(email="viewer@example.com", role="viewer")
        login = client.post("/api/v1/auth/login", json={"email": "viewer@example.com", "password": "secret123"})
        token = login.get_json()["access_token"]

        response = client.get("/api/v1/builder/templates", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403


class TestBuilderApi:
    """Tests for the builder endpoints."""

    def test_templates(self, client, auth_headers) -> None:
        body = client.get("/api/v1/builder/templates", headers=auth_headers).get_json()

        assert "Hero" in body["categories"]
        assert any(t["id"] == "menu-dynamic" for t in body["templates"])

    def test_batch_save_creates_and_reports_id_map(self, client, auth_headers, homepage) -> None:
        payload = {
            "sections": [
                {"id": "section-1", "type": "hero", "name": "Hero", "order": 0, "data": {"headline": "Hi"}},
                {"id": "section-2", "type": "cta", "name": "CTA", "order": 1, "data": {"title": "Go"}},
            ]
        }

        response = client.put(f"/api/v1/builder/pages/{homepage.id}/sections", json=payload, headers=auth_headers)

        body = response.get_json()
        assert response.status_code == 200
        assert body["created"] == 2
        assert set(body["idMap"]) == {"section-1", "section-2"}
        assert [s["type"] for s in body["sections"]] == ["hero", "cta"]

    def test_batch_save_rejects_invalid_data_without_writing(self, client, auth_headers, homepage) -> None:
        payload = {
            "sections": [
                {"id": "section-1", "type": "hero", "name": "Hero", "order": 0},
                {"id": "section-2", "type": "gallery", "name": "Gallery", "order": 1, "data": {"columns": 12}},
            ]
        }

        response = client.put(f"/api/v1/builder/pages/{homepage.id}/sections", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json() == {
            "error": "ValidationFailure",
            "message": response.get_json()["message"],
            "field": "columns",
        }
        assert Section.query.count() == 0

    def test_batch_save_rejects_duplicate_ids(self, client, auth_headers, homepage) -> None:
        payload = {
            "sections": [
                {"id": "section-1", "type": "hero", "name": "A", "order": 0},
                {"id": "section-1", "type": "cta", "name": "B", "order": 1},
            ]
        }

        response = client.put(f"/api/v1/builder/pages/{homepage.id}/sections", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"] == "InvariantViolation"

    def test_unknown_page_is_404(self, client, auth_headers) -> None:
        response = client.get("/api/v1/builder/pages/missing/sections", headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"] == "PageNotFound"

    def test_add_update_delete(self, client, auth_headers, homepage) -> None:
        created = client.post(
            f"/api/v1/builder/pages/{homepage.id}/sections",
            json={"type": "content", "name": "About", "data": {"title": "Our Story"}},
            headers=auth_headers,
        )
        assert created.status_code == 201
        section_id = created.get_json()["id"]

        updated = client.put(
            f"/api/v1/builder/sections/{section_id}",
            json={"isVisible": False, "data": {"title": "Updated"}},
            headers=auth_headers,
        )
        assert updated.get_json()["isVisible"] is False
        assert updated.get_json()["data"]["title"] == "Updated"

        deleted = client.delete(f"/api/v1/builder/sections/{section_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert Section.query.count() == 0

    def test_reorder(self, client, auth_headers, homepage) -> None:
        a = SectionFactory(page=homepage, order=0, name="A")
        b = SectionFactory(page=homepage, order=1, name="B")

        response = client.patch(
            f"/api/v1/builder/pages/{homepage.id}/sections/reorder",
            json={"sections": [{"id": a.id, "order": 1}, {"id": b.id, "order": 0}]},
            headers=auth_headers,
        )

        assert [s["name"] for s in response.get_json()["sections"]] == ["B", "A"]

    def test_batch_save_rejects_a_non_integer_order(self, client, auth_headers, homepage) -> None:
        payload = {"sections": [{"id": "section-1", "type": "hero", "name": "Hero", "order": "first"}]}

        response = client.put(f"/api/v1/builder/pages/{homepage.id}/sections", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"] == "ValidationFailure"
        assert response.get_json()["field"] == "order"
        assert Section.query.count() == 0

    def test_update_rejects_a_non_integer_order(self, client, auth_headers, homepage) -> None:
        section = SectionFactory(page=homepage, order=0, name="A")

        response = client.put(f"/api/v1/builder/sections/{section.id}", json={"order": "top"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["field"] == "order"

    def test_reorder_rejects_a_non_integer_order(self, client, auth_headers, homepage) -> None:
        a = SectionFactory(page=homepage, order=0, name="A")
        b = SectionFactory(page=homepage, order=1, name="B")

        response = client.patch(
            f"/api/v1/builder/pages/{homepage.id}/sections/reorder",
            json={"sections": [{"id": a.id, "order": "last"}, {"id": b.id, "order": 0}]},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.get_json()["field"] == "order"
        assert [s.order for s in Section.query.order_by(Section.order).all()] == [0, 1]
        assert Section.query.filter_by(order=0).one().name == "A"

    def test_preview_renders_unsaved_sections(self, client, auth_headers, homepage) -> None:
        payload = {
            "sections": [
                {"id": "section-9", "type": "content", "name": "Draft", "isVisible": False, "data": {"title": "Draft copy"}},
            ],
            "selectedId": "section-9",
        }

        response = client.post(f"/api/v1/builder/pages/{homepage.id}/preview", json=payload, headers=auth_headers)

        html = response.get_data(as_text=True)
        assert response.mimetype == "text/html"
        assert "Draft copy" in html
        assert "builder-section--hidden" in html
        assert "builder-section--selected" in html


class TestPublicApi:
    """Tests for the unauthenticated endpoints."""

    def test_health(self, client) -> None:
        assert client.get("/api/v1/health").get_json()["status"] == "ok"

    def test_menu(self, client, app) -> None:
        category = MenuCategoryFactory(name="Pizza")
        MenuItemFactory(category=category, name="Margherita", price="$12")

        body = client.get("/api/v1/menu").get_json()

        assert body["categories"][0]["items"][0]["price"] == "$12"

    def test_business_not_configured(self, client) -> None:
        assert client.get("/api/v1/business").status_code == 404

    def test_homepage_renders_visible_sections(self, client, homepage) -> None:
        BusinessInfoFactory()
        SectionFactory(page=homepage, order=0, type="hero", data={"headline": "Welcome in"})
        SectionFactory(page=homepage, order=1, type="content", data={"title": "Hidden story"}, is_visible=False)
        SectionFactory(page=homepage, order=2, type="location", data={})

        html = client.get("/").get_data(as_text=True)

        assert "Welcome in" in html
        assert "Hidden story" not in html
        assert "Tuesday - Thursday" in html

    def test_no_homepage_is_404(self, client) -> None:
        assert client.get("/").status_code == 404

    def test_unpublished_homepage_is_404(self, client, app) -> None:
        PageFactory(is_homepage=True, is_published=False)

        assert client.get("/").status_code == 404

    def test_openapi_document_is_served(self, client) -> None:
        response = client.get("/openapi/builder.yaml")

        assert response.status_code == 200
        assert b"Page Builder API" in response.data
        response.close()

"""Tests for homepage seeding."""

import pytest

from pagebuilder.application.builder.load_sections import get_homepage, list_page_sections
from pagebuilder.application.builder.seed import DEFAULT_HOMEPAGE_TEMPLATES, seed_homepage
from pagebuilder.domain.exceptions import TemplateNotFound


class TestSeedHomepage:
    """Tests for seeding starter sections."""

    def test_creates_published_homepage(self, app) -> None:
        result = seed_homepage()

        page = get_homepage()
        assert page.slug == "home"
        assert result["created"] == len(DEFAULT_HOMEPAGE_TEMPLATES)
        assert [s.order for s in list_page_sections(page_id=page.id)] == list(range(len(DEFAULT_HOMEPAGE_TEMPLATES)))

    def test_appends_to_existing_homepage(self, app, homepage) -> None:
        seed_homepage(template_ids=["hero-video"])
        seed_homepage(template_ids=["cta-simple"])

        assert [s.type for s in list_page_sections(page_id=homepage.id)] == ["hero", "cta"]

    def test_unknown_template_writes_nothing(self, app, homepage) -> None:
        with pytest.raises(TemplateNotFound):
            seed_homepage(template_ids=["hero-video", "nope"])

        assert list_page_sections(page_id=homepage.id) == []

    def test_cli_command(self, app) -> None:
        runner = app.test_cli_runner()

        result = runner.invoke(args=["seed-homepage", "--template", "hero-minimal"])

        assert result.exit_code == 0
        assert "1 sections created" in result.output

import click
from flask import Flask

from pagebuilder.application.builder.seed import DEFAULT_HOMEPAGE_TEMPLATES, seed_homepage


def register_commands(app: Flask) -> None:
    @app.cli.command("seed-homepage")
    @click.option(
        "--template",
        "templates",
        multiple=True,
        help="Template id to append; repeat for several. Defaults to the standard homepage set.",
    )
    def seed_homepage_command(templates):
        """Create the homepage if needed and append starter sections."""
        result = seed_homepage(template_ids=templates or DEFAULT_HOMEPAGE_TEMPLATES)
        click.echo(
            f"Seeded page {result['pageId']}: {result['created']} sections created"
        )

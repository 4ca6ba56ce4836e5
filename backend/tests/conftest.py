"""
Pytest configuration for the page builder tests.
"""

import pytest
from flask_jwt_extended import create_access_token

from pagebuilder import create_app
from pagebuilder.extensions import db

from .factories import PageFactory, UserFactory


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    return UserFactory(email="admin@example.com", role="admin")


@pytest.fixture
def auth_headers(admin_user):
    """Bearer headers for an admin token."""
    token = create_access_token(
        identity=admin_user.id,
        additional_claims={"role": admin_user.role},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def homepage(app):
    return PageFactory(title="Home", slug="home", is_homepage=True, is_published=True)

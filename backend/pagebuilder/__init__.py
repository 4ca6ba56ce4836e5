import logging
import os

from flask import Flask, abort, send_file
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .application.builder.render_page import render_homepage_html
from .cli import register_commands
from .errors import register_error_handlers

# Model modules register their tables with the metadata
from .models import activity_log, business_info, menu, page, section, user  # noqa: F401

SWAGGER_URL = "/swagger"
OPENAPI_URL = "/openapi/builder.yaml"
OPENAPI_FILE = os.path.join("api", "v1", "builder_openapi.yaml")


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    log_level = app.config["LOG_LEVEL"]
    app.logger.setLevel(log_level)
    logging.getLogger("pagebuilder").setLevel(log_level)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # API, errors, CLI
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    _register_site(app)
    _register_api_docs(app)

    return app


def _register_site(app: Flask) -> None:
    @app.route("/", methods=["GET"], endpoint="homepage")
    def homepage():
        html = render_homepage_html()
        if html is None:
            abort(404)
        return html


def _register_api_docs(app: Flask) -> None:
    spec_path = os.path.join(app.root_path, OPENAPI_FILE)

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_builder")
    def serve_openapi():
        if not os.path.exists(spec_path):
            abort(404)
        return send_file(spec_path, mimetype="application/yaml", as_attachment=False)

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        OPENAPI_URL,
        config={
            "app_name": "Page Builder API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

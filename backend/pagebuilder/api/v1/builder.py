from flask import Response, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from pagebuilder.application.builder.load_sections import get_page, list_page_sections
from pagebuilder.application.builder.render_page import render_page_html, render_preview_html
from pagebuilder.application.builder.save_sections import save_page_sections
from pagebuilder.application.builder.section_crud import (
    create_section,
    delete_section,
    reorder_sections,
    update_section,
)
from pagebuilder.domain.document import SectionDocument, SectionInstance
from pagebuilder.domain.exceptions import ValidationFailure
from pagebuilder.domain.templates import list_templates, list_templates_by_category
from pagebuilder.normalizers.page import normalize_page
from pagebuilder.normalizers.section import normalize_section
from pagebuilder.utils.decorators import roles_required
from . import v1_bp

EDITOR_ROLES = ("admin", "editor")


def _section_list(body, *, strict):
    raw = body.get("sections") if isinstance(body, dict) else None
    if not isinstance(raw, list):
        raise ValidationFailure("Request body needs a sections list", field="sections")

    instances = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValidationFailure("Each section must be an object", field="sections")
        instances.append(SectionInstance.from_dict(entry, strict=strict))
    return instances


# ------------------------
# Templates
# ------------------------

@v1_bp.route("/builder/templates", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_templates():
    return jsonify({
        "templates": [t.to_dict() for t in list_templates()],
        "categories": {
            category: [t.to_dict() for t in templates]
            for category, templates in list_templates_by_category().items()
        },
    })


# ------------------------
# Pages & Sections
# ------------------------

@v1_bp.route("/builder/pages/<page_id>", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_builder_page(page_id):
    return jsonify(normalize_page(get_page(page_id=page_id), admin=True))


@v1_bp.route("/builder/pages/<page_id>/sections", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_page_sections(page_id):
    sections = list_page_sections(page_id=page_id)
    return jsonify({
        "pageId": page_id,
        "sections": [s.to_dict() for s in sections],
    })


@v1_bp.route("/builder/pages/<page_id>/sections", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def save_sections(page_id):
    """Replace the page's section list in one atomic batch."""
    body = request.get_json(silent=True) or {}

    # the document renumbers by order and rejects duplicate ids before any write
    document = SectionDocument(_section_list(body, strict=True))

    result = save_page_sections(
        page_id=page_id,
        sections=document.sections,
        actor_id=get_jwt_identity(),
    )
    result["sections"] = [s.to_dict() for s in list_page_sections(page_id=page_id)]
    return jsonify(result), 200


@v1_bp.route("/builder/pages/<page_id>/sections", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def add_section(page_id):
    data = request.get_json(silent=True) or {}
    section = create_section(page_id=page_id, data=data, actor_id=get_jwt_identity())
    return jsonify(normalize_section(section, admin=True)), 201


@v1_bp.route("/builder/sections/<section_id>", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def edit_section(section_id):
    data = request.get_json(silent=True) or {}
    section = update_section(section_id=section_id, data=data, actor_id=get_jwt_identity())
    return jsonify(normalize_section(section, admin=True))


@v1_bp.route("/builder/sections/<section_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def remove_section(section_id):
    delete_section(section_id=section_id, actor_id=get_jwt_identity())
    return jsonify({"message": "Section deleted"})


@v1_bp.route("/builder/pages/<page_id>/sections/reorder", methods=["PATCH"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def reorder_page_sections(page_id):
    items = (request.get_json(silent=True) or {}).get("sections")
    if not isinstance(items, list):
        raise ValidationFailure("Request body needs a sections list", field="sections")

    ordered = reorder_sections(page_id=page_id, items=items, actor_id=get_jwt_identity())
    return jsonify({
        "pageId": page_id,
        "sections": [normalize_section(s) for s in ordered],
    })


# ------------------------
# Rendering
# ------------------------

@v1_bp.route("/builder/pages/<page_id>/preview", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def preview_page(page_id):
    """Canvas HTML for the posted (possibly unsaved) section list."""
    body = request.get_json(silent=True) or {}
    html = render_preview_html(
        page_id=page_id,
        sections=_section_list(body, strict=False),
        selected_id=body.get("selectedId"),
    )
    return Response(html, mimetype="text/html")


@v1_bp.route("/builder/pages/<page_id>/render", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def render_page(page_id):
    return Response(render_page_html(page_id=page_id), mimetype="text/html")

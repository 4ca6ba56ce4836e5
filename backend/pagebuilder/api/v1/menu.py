from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from pagebuilder.application.menu.items import create_menu_item, list_menu_items, update_menu_item
from pagebuilder.application.menu.queries import get_menu_categories
from pagebuilder.normalizers.menu import normalize_menu_item
from pagebuilder.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/menu", methods=["GET"])
def get_menu():
    return jsonify({"categories": get_menu_categories()})


@v1_bp.route("/admin/menu/items", methods=["GET"])
@jwt_required()
@roles_required("admin")
def admin_list_menu_items():
    items = list_menu_items(category_id=request.args.get("categoryId"))
    return jsonify({"items": [normalize_menu_item(i, admin=True) for i in items]})


@v1_bp.route("/admin/menu/items", methods=["POST"])
@jwt_required()
@roles_required("admin")
def admin_create_menu_item():
    data = request.get_json(silent=True) or {}
    item = create_menu_item(data=data, actor_id=get_jwt_identity())
    return jsonify(normalize_menu_item(item, admin=True)), 201


@v1_bp.route("/admin/menu/items/<item_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def admin_update_menu_item(item_id):
    data = request.get_json(silent=True) or {}
    item = update_menu_item(item_id=item_id, data=data, actor_id=get_jwt_identity())
    return jsonify(normalize_menu_item(item, admin=True))

from flask import jsonify, request
from flask_jwt_extended import jwt_required

from pagebuilder.application.activity.queries import RECENT_ACTIVITY_LIMIT, list_recent_activity
from pagebuilder.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/admin/activity", methods=["GET"])
@jwt_required()
@roles_required("admin")
def admin_recent_activity():
    limit = request.args.get("limit", RECENT_ACTIVITY_LIMIT, type=int)
    return jsonify({"activity": list_recent_activity(limit=limit)})

from flask import jsonify
from pagebuilder.application.business.queries import get_business_info
from . import v1_bp


@v1_bp.route("/business", methods=["GET"])
def get_business():
    info = get_business_info()
    if info is None:
        return jsonify({"error": "Business info not configured"}), 404
    return jsonify(info)

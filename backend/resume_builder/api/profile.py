from flask import Blueprint, g, jsonify

from resume_builder.core.security import require_auth

bp = Blueprint("profile", __name__)


@bp.get("")
@require_auth
def get_profile():
    return jsonify({"success": True, "data": g.current_user.to_dict()})

# Overview: Flask API route for the minimal user list used by pickers.

from flask import Blueprint, jsonify

from ..decorators import require_auth
from ..services import user_service


users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.get("")
@require_auth
def list_users():
    """Any signed-in user may list id/username/name for assignment selects."""
    users = user_service.list_users()
    return jsonify({"items": [u.to_summary_dict() for u in users]})

# Overview: Flask API routes for sign-in; parses credentials and returns session tokens.

from flask import Blueprint, jsonify, current_app

from ..decorators import require_auth, current_identity
from ..services import auth_service, session_service
from ..validation import ValidationError, get_json_payload


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and issue a session token.

    Request body:
    - username: str (required)
    - password: str (required)

    The token goes in the Authorization header (Bearer) on later requests.
    Failure is always "Invalid credentials" regardless of which field was wrong.
    """
    try:
        data = get_json_payload()
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    username = data.get("username")
    password = data.get("password")
    username = str(username) if username is not None else ""
    password = str(password) if password is not None else ""

    try:
        identity = auth_service.authenticate(username, password)
    except Exception:
        current_app.logger.exception("Failed to authenticate user")
        return jsonify({"error": "Internal server error"}), 500

    if identity is None:
        current_app.logger.info("Failed login for username=%r", username)
        return jsonify({"error": "Invalid credentials"}), 401

    token = session_service.issue_token(identity)
    return jsonify({"token": token, "user": identity.to_dict()}), 200


@auth_bp.get("/session")
@require_auth
def session_route():
    """Return the identity carried by the current token."""
    return jsonify({"user": current_identity().to_dict()})

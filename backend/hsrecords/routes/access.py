# Overview: Flask API route for the UI route-access check.

from flask import Blueprint, request, jsonify

from ..decorators import identity_from_request
from ..services import access_service


access_bp = Blueprint("access", __name__, url_prefix="/api/access")


@access_bp.get("/check")
def check_access():
    """
    GET /api/access/check?path=/dashboard/capa -> {"allowed": bool}

    Advisory only: the UI uses it to hide or redirect. Every data route
    enforces its own authentication and role checks. Failures also carry
    "allowed": false so the UI can treat every response the same way.
    """
    identity, error = identity_from_request()
    if identity is None:
        return jsonify({"allowed": False, "error": error}), 401

    path = request.args.get("path", "")
    if not path:
        return jsonify({"allowed": False, "error": "Missing path"}), 400

    return jsonify({"allowed": access_service.is_allowed(identity, path)})

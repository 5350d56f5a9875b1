# Overview: Request authentication and role decorators for API routes.

from functools import wraps
from flask import request, jsonify, g, current_app

from .services import session_service
from .services.session_service import SessionIdentity


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


def current_identity() -> SessionIdentity | None:
    return getattr(g, "identity", None)


def identity_from_request() -> tuple[SessionIdentity | None, str | None]:
    """Read the bearer token; returns (identity, None) or (None, error message)."""
    token = _bearer_token()
    if not token:
        return None, "Unauthorized"

    identity = session_service.read_token(token)
    if identity is None:
        return None, "Invalid or expired token"
    return identity, None


def require_auth(f):
    """
    Require a valid session token.

    Sets g.identity to the SessionIdentity read from the token claims.
    Returns 401 if the Authorization header is missing or the token is
    invalid or expired.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        identity, error = identity_from_request()
        if identity is None:
            return jsonify({"error": error}), 401

        g.identity = identity
        return f(*args, **kwargs)

    return decorated_function


def require_admin(f):
    """
    Require the authenticated identity to hold the ADMIN role.

    Must be stacked under @require_auth.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        identity = current_identity()
        if identity is None:
            return jsonify({"error": "Unauthorized"}), 401

        if not identity.is_admin:
            current_app.logger.warning(
                "Admin access denied: user=%s path=%s method=%s",
                identity.username, request.path, request.method,
            )
            return jsonify({"error": "Forbidden"}), 403

        return f(*args, **kwargs)

    return decorated_function

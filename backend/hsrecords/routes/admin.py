# Overview: Flask API routes for admin operations; parses input and returns JSON responses.

# backend/hsrecords/routes/admin.py
"""
Admin routes for user and route-grant management.

Provides endpoints for:
- User management (list, create, update, delete)
- Route grants (list, grant, revoke)

All endpoints require an authenticated ADMIN.
"""

from flask import Blueprint, jsonify, current_app

from ..decorators import require_auth, require_admin, current_identity
from ..extensions import db
from ..models import UserRole
from ..services import user_service
from ..validation import (
    ValidationError,
    ConflictError,
    NotFoundError,
    get_json_payload,
    coerce_bool,
)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _error(e: Exception, status: int):
    return jsonify({"error": str(e)}), status


# =============================================================================
# USER MANAGEMENT
# =============================================================================

@admin_bp.get("/users")
@require_auth
@require_admin
def list_users():
    """List all users ordered by username."""
    users = user_service.list_users()
    return jsonify({"items": [u.to_dict() for u in users]})


@admin_bp.post("/users")
@require_auth
@require_admin
def create_user():
    """
    Create a new user.

    Request body:
    - username: str (required)
    - password: str (required)
    - name: str (optional)
    - email: str (optional)
    - role: "ADMIN" | "USER" (optional, default USER)
    """
    try:
        data = get_json_payload()
        user = user_service.create_user(
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            role=data.get("role") or UserRole.USER,
            name=data.get("name"),
            email=data.get("email"),
        )
        current_app.logger.info(
            "User %s created by %s", user.username, current_identity().username
        )
        return jsonify({"id": user.id}), 201

    except ConflictError as e:
        return _error(e, 409)
    except ValidationError as e:
        return _error(e, 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create user")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.patch("/users/<int:user_id>")
@require_auth
@require_admin
def update_user(user_id: int):
    """
    Update user details.

    Request body (all optional):
    - name, email: str (blank clears)
    - username: str (blank ignored)
    - role: str
    - password: str (blank ignored)
    """
    try:
        data = get_json_payload()
        user_service.update_user(user_id, data)
        current_app.logger.info(
            "User %s updated by %s", user_id, current_identity().username
        )
        return jsonify({"ok": True})

    except NotFoundError as e:
        return _error(e, 404)
    except ConflictError as e:
        return _error(e, 409)
    except ValidationError as e:
        return _error(e, 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to update user")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.delete("/users/<int:user_id>")
@require_auth
@require_admin
def delete_user(user_id: int):
    """Delete a user. Deleting the signed-in account is refused."""
    try:
        user_service.delete_user(user_id, acting_user_id=current_identity().id)
        current_app.logger.info(
            "User %s deleted by %s", user_id, current_identity().username
        )
        return jsonify({"ok": True})

    except NotFoundError as e:
        return _error(e, 404)
    except ValidationError as e:
        return _error(e, 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete user")
        return jsonify({"error": "Internal server error"}), 500


# =============================================================================
# ROUTE GRANTS
# =============================================================================

@admin_bp.get("/users/<int:user_id>/routes")
@require_auth
@require_admin
def list_user_routes(user_id: int):
    try:
        grants = user_service.list_route_access(user_id)
    except NotFoundError as e:
        return _error(e, 404)
    return jsonify({"items": [grant.to_dict() for grant in grants]})


@admin_bp.post("/users/<int:user_id>/routes")
@require_auth
@require_admin
def grant_user_route(user_id: int):
    """
    Grant a UI path to a user (upsert on user + path).

    Request body:
    - path: str (required)
    - is_prefix: bool (default true)
    """
    try:
        data = get_json_payload()
        grant = user_service.grant_route_access(
            user_id,
            str(data.get("path") or ""),
            is_prefix=coerce_bool(data.get("is_prefix"), default=True),
        )
        current_app.logger.info(
            "Route %s (prefix=%s) granted to user %s by %s",
            grant.path, grant.is_prefix, user_id, current_identity().username,
        )
        return jsonify({"id": grant.id}), 201

    except NotFoundError as e:
        return _error(e, 404)
    except ValidationError as e:
        return _error(e, 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to grant route access")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.delete("/user-routes/<int:grant_id>")
@require_auth
@require_admin
def revoke_user_route(grant_id: int):
    try:
        user_service.revoke_route_access(grant_id)
        return jsonify({"ok": True})

    except NotFoundError as e:
        return _error(e, 404)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to revoke route access")
        return jsonify({"error": "Internal server error"}), 500

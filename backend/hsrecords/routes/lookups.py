# Overview: Flask API routes for lookup tables; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_admin, current_identity
from ..extensions import db
from ..services import lookup_service
from ..validation import (
    ValidationError,
    NotFoundError,
    get_json_payload,
    coerce_bool,
    coerce_optional_int,
)


lookups_bp = Blueprint("lookups", __name__, url_prefix="/api/lookups")


@lookups_bp.get("")
@require_auth
def list_lookups():
    """
    Query params (mutually exclusive, checked in this order):
    - type: single type -> {"type": t, "items": [...]} (active only)
    - types: comma list -> {"items": {type: [...]}} (active only)
    - neither -> {"items": [...]} every item, inactive included
    """
    lookup_type = request.args.get("type")
    types = request.args.get("types")

    if lookup_type:
        items = lookup_service.list_by_type(lookup_type)
        return jsonify({"type": lookup_type, "items": [i.to_dict() for i in items]})

    if types:
        wanted = [t.strip() for t in types.split(",") if t.strip()]
        grouped = lookup_service.list_grouped(wanted)
        return jsonify({
            "items": {t: [i.to_dict() for i in items] for t, items in grouped.items()}
        })

    return jsonify({"items": [i.to_dict() for i in lookup_service.list_all()]})


@lookups_bp.post("")
@require_auth
@require_admin
def upsert_lookup():
    """
    Create or update the item keyed by (type, value).

    Request body:
    - type, value, label: str (required)
    - order: int (optional)
    - active: bool (default true)
    """
    try:
        data = get_json_payload()
        item = lookup_service.upsert_item(
            data.get("type"),
            data.get("value"),
            data.get("label"),
            order=coerce_optional_int(data.get("order"), "order"),
            active=coerce_bool(data.get("active"), default=True),
        )
        current_app.logger.info(
            "Lookup %s:%s saved by %s", item.type, item.value, current_identity().username
        )
        return jsonify({"id": item.id}), 201

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to save lookup item")
        return jsonify({"error": "Internal server error"}), 500


@lookups_bp.delete("/<int:item_id>")
@require_auth
@require_admin
def delete_lookup(item_id: int):
    """Hard delete, or deactivate when the row is still referenced."""
    try:
        outcome = lookup_service.remove_item(item_id)
        current_app.logger.info(
            "Lookup item %s %s by %s", item_id, outcome, current_identity().username
        )
        return jsonify({"ok": True, "result": outcome})

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to remove lookup item")
        return jsonify({"error": "Internal server error"}), 500

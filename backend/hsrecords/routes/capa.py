# Overview: Flask API routes for CAPA records; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth
from ..extensions import db
from ..services import capa_service
from ..validation import ValidationError, NotFoundError, get_json_payload, parse_limit


capa_bp = Blueprint("capa", __name__, url_prefix="/api/capa")


@capa_bp.get("")
@require_auth
def list_capas():
    """
    Most recent CAPA records first, with the source incident and assignee.

    Query params:
    - limit: int (default 10)
    """
    limit = parse_limit(request.args.get("limit"), current_app.config["DEFAULT_LIST_LIMIT"])
    items = capa_service.list_capas(limit)
    return jsonify({"items": [c.to_dict(include_relations=True) for c in items]})


@capa_bp.post("")
@require_auth
def create_capa():
    """
    Request body:
    - incident_id: int (required, must exist)
    - description: str (required)
    - action_taken: str (required)
    - assigned_to_id: int (optional)
    - cost_amount: number (optional, blank = none)
    - cost_currency: str (optional)
    """
    try:
        data = get_json_payload()
        capa = capa_service.create_capa(data)
        return jsonify({"id": capa.id}), 201

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create CAPA")
        return jsonify({"error": "Internal server error"}), 500

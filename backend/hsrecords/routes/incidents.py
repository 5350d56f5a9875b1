# Overview: Flask API routes for incident reports; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, current_identity
from ..extensions import db
from ..services import incident_service
from ..validation import ValidationError, get_json_payload, parse_limit


incidents_bp = Blueprint("incidents", __name__, url_prefix="/api/incidents")


@incidents_bp.get("")
@require_auth
def list_incidents():
    """
    Most recent incidents first.

    Query params:
    - limit: int (default 10)
    """
    limit = parse_limit(request.args.get("limit"), current_app.config["DEFAULT_LIST_LIMIT"])
    items = incident_service.list_incidents(limit)
    return jsonify({"items": [i.to_dict(include_reporter=True) for i in items]})


@incidents_bp.post("")
@require_auth
def create_incident():
    """
    Report an incident as the signed-in user.

    Request body (all required unless noted):
    - site, incident_area, incident_category, shift, severity,
      personnel_type, injury_area, operational_category: lookup values
    - date: ISO date (only the first 10 characters are used)
    - time: "HH:MM"
    - description: str
    - risk_score: number (optional)
    - likelihood, result, exposure: risk factors (optional, scored when
      risk_score is absent)
    """
    try:
        data = get_json_payload()
        incident = incident_service.create_incident(current_identity().id, data)
        return jsonify({"id": incident.id}), 201

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create incident")
        return jsonify({"error": "Internal server error"}), 500

# Overview: Flask API route for the risk calculator.

from flask import Blueprint, jsonify

from ..decorators import require_auth
from ..services import risk_service
from ..validation import ValidationError, get_json_payload


risk_bp = Blueprint("risk", __name__, url_prefix="/api/risk")


@risk_bp.post("/score")
@require_auth
def score():
    """
    Request body: likelihood, result, exposure (factor keys).

    Returns {"score": int, "recommendation": str}; unknown factors give 0.
    """
    try:
        data = get_json_payload()
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(risk_service.assess(
        data.get("likelihood"),
        data.get("result"),
        data.get("exposure"),
    ))

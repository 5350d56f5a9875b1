# Overview: Service-layer operations for incident reports.

from __future__ import annotations

from ..extensions import db
from ..models import Incident
from ..time_utils import combine_local_date_time
from ..validation import (
    MAX_INT64,
    MIN_INT64,
    ValidationError,
    clean_text,
    coerce_optional_number,
    require_fields,
)
from . import risk_service


# Payload field -> Incident column (copied verbatim as trimmed strings)
CATEGORICAL_FIELDS = (
    "site",
    "incident_area",
    "incident_category",
    "shift",
    "severity",
    "personnel_type",
    "injury_area",
    "operational_category",
)

REQUIRED_FIELDS = (
    "site",
    "date",
    "time",
    "incident_area",
    "incident_category",
    "shift",
    "severity",
    "personnel_type",
    "injury_area",
    "operational_category",
    "description",
)


def list_incidents(limit: int) -> list[Incident]:
    return db.session.query(Incident).order_by(
        Incident.created_at.desc(),
        Incident.id.desc(),
    ).limit(limit).all()


def _resolve_risk_score(payload: dict) -> int | None:
    """
    Explicit risk_score wins. Otherwise score the likelihood/result/exposure
    factors if the client sent them; a zero (incomplete) score is stored as null.
    """
    explicit = coerce_optional_number(payload.get("risk_score"), "risk_score")
    if explicit is not None:
        score = int(round(explicit))
        if not MIN_INT64 <= score <= MAX_INT64:
            raise ValidationError("risk_score is out of range")
        return score

    factors = [payload.get(k) for k in ("likelihood", "result", "exposure")]
    if not any(factors):
        return None
    score = risk_service.risk_score(*factors)
    return score or None


def create_incident(reporter_id: int, payload: dict) -> Incident:
    """
    Persist a new incident reported by ``reporter_id``.

    occurred_at is built from the first 10 characters of ``date`` and the
    ``time`` of day, as local wall-clock time. An unparseable pair is
    rejected rather than stored.
    """
    require_fields(payload, REQUIRED_FIELDS)

    try:
        occurred_at = combine_local_date_time(payload["date"], payload["time"])
    except ValueError:
        raise ValidationError("Invalid occurrence date or time")

    incident = Incident(
        reporter_id=reporter_id,
        occurred_at=occurred_at,
        description=clean_text(payload["description"]),
        risk_score=_resolve_risk_score(payload),
        **{field: clean_text(payload[field]) for field in CATEGORICAL_FIELDS},
    )
    db.session.add(incident)
    db.session.commit()
    return incident

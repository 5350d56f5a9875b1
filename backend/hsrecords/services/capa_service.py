# Overview: Service-layer operations for CAPA (corrective/preventive action) records.

from __future__ import annotations

from ..extensions import db
from ..models import Capa, Incident, User
from ..validation import (
    NotFoundError,
    ValidationError,
    require_fields,
    clean_text,
    clean_optional_text,
    coerce_optional_decimal,
    coerce_optional_int,
)


# Incident columns copied onto the CAPA at creation
SNAPSHOT_FIELDS = (
    "site",
    "occurred_at",
    "incident_area",
    "incident_category",
    "shift",
    "severity",
    "personnel_type",
    "operational_category",
)


def list_capas(limit: int) -> list[Capa]:
    return db.session.query(Capa).order_by(
        Capa.created_at.desc(),
        Capa.id.desc(),
    ).limit(limit).all()


def create_capa(payload: dict) -> Capa:
    """
    Raise a CAPA against an existing incident.

    The incident's categorical fields are copied in the same session
    transaction that inserts the CAPA.
    """
    require_fields(payload, ("incident_id", "description", "action_taken"))

    incident_id = coerce_optional_int(payload["incident_id"], "incident_id")
    incident = db.session.get(Incident, incident_id)
    if not incident:
        raise NotFoundError("Incident not found")

    assigned_to_id = coerce_optional_int(payload.get("assigned_to_id"), "assigned_to_id")
    if assigned_to_id is not None and not db.session.get(User, assigned_to_id):
        raise ValidationError("assigned_to_id does not reference a user")

    capa = Capa(
        incident_id=incident.id,
        assigned_to_id=assigned_to_id,
        description=clean_text(payload["description"]),
        action_taken=clean_text(payload["action_taken"]),
        cost_amount=coerce_optional_decimal(payload.get("cost_amount"), "cost_amount"),
        cost_currency=clean_optional_text(payload.get("cost_currency")),
        **{field: getattr(incident, field) for field in SNAPSHOT_FIELDS},
    )
    db.session.add(capa)
    db.session.commit()
    return capa

from __future__ import annotations

from ..extensions import db
from ..time_utils import to_local_iso, to_utc_z


class Incident(db.Model):
    """
    Reported health and safety incident.

    Categorical fields hold the lookup *value* strings as they were at
    report time. Incidents are never updated or deleted.

    occurred_at is the reporter's local wall-clock time (naive).
    """
    __tablename__ = "incidents"
    __table_args__ = (
        db.Index("ix_incidents_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    reporter_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    site = db.Column(db.String(128), nullable=False)
    occurred_at = db.Column(db.DateTime, nullable=False)
    incident_area = db.Column(db.String(128), nullable=False)
    incident_category = db.Column(db.String(128), nullable=False)
    shift = db.Column(db.String(128), nullable=False)
    severity = db.Column(db.String(128), nullable=False)
    personnel_type = db.Column(db.String(128), nullable=False)
    injury_area = db.Column(db.String(128), nullable=False)
    operational_category = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=False)
    risk_score = db.Column(db.Integer, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    reporter = db.relationship("User", backref=db.backref("reported_incidents", lazy=True))

    def __repr__(self) -> str:
        return f"<Incident id={self.id} site={self.site!r} severity={self.severity!r}>"

    def to_dict(self, include_reporter: bool = False) -> dict:
        data = {
            "id": self.id,
            "reporter_id": self.reporter_id,
            "site": self.site,
            "occurred_at": to_local_iso(self.occurred_at),
            "incident_area": self.incident_area,
            "incident_category": self.incident_category,
            "shift": self.shift,
            "severity": self.severity,
            "personnel_type": self.personnel_type,
            "injury_area": self.injury_area,
            "operational_category": self.operational_category,
            "description": self.description,
            "risk_score": self.risk_score,
            "created_at": to_utc_z(self.created_at),
        }
        if include_reporter:
            reporter = self.reporter
            data["reporter"] = {
                "id": reporter.id,
                "username": reporter.username,
                "name": reporter.name,
                "email": reporter.email,
            } if reporter else None
        return data


class Capa(db.Model):
    """
    Corrective and preventive action raised against an incident.

    The incident's categorical fields and occurred_at are copied at creation
    so the CAPA stays stable regardless of later incident changes.
    """
    __tablename__ = "capas"
    __table_args__ = (
        db.Index("ix_capas_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    incident_id = db.Column(db.Integer, db.ForeignKey("incidents.id"), nullable=False, index=True)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True, index=True)

    # Snapshot of the incident
    site = db.Column(db.String(128), nullable=False)
    occurred_at = db.Column(db.DateTime, nullable=False)
    incident_area = db.Column(db.String(128), nullable=False)
    incident_category = db.Column(db.String(128), nullable=False)
    shift = db.Column(db.String(128), nullable=False)
    severity = db.Column(db.String(128), nullable=False)
    personnel_type = db.Column(db.String(128), nullable=False)
    operational_category = db.Column(db.String(128), nullable=False)

    description = db.Column(db.Text, nullable=False)
    action_taken = db.Column(db.Text, nullable=False)
    cost_amount = db.Column(db.Numeric(12, 2), nullable=True)
    cost_currency = db.Column(db.String(8), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    incident = db.relationship("Incident", backref=db.backref("capas", lazy=True))
    assigned_to = db.relationship("User", backref=db.backref("assigned_capas", lazy=True))

    def __repr__(self) -> str:
        return f"<Capa id={self.id} incident_id={self.incident_id}>"

    def to_dict(self, include_relations: bool = False) -> dict:
        data = {
            "id": self.id,
            "incident_id": self.incident_id,
            "assigned_to_id": self.assigned_to_id,
            "site": self.site,
            "occurred_at": to_local_iso(self.occurred_at),
            "incident_area": self.incident_area,
            "incident_category": self.incident_category,
            "shift": self.shift,
            "severity": self.severity,
            "personnel_type": self.personnel_type,
            "operational_category": self.operational_category,
            "description": self.description,
            "action_taken": self.action_taken,
            "cost_amount": float(self.cost_amount) if self.cost_amount is not None else None,
            "cost_currency": self.cost_currency,
            "created_at": to_utc_z(self.created_at),
        }
        if include_relations:
            data["incident"] = self.incident.to_dict() if self.incident else None
            data["assigned_to"] = self.assigned_to.to_summary_dict() if self.assigned_to else None
        return data

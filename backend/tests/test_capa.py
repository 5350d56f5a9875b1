"""CAPA creation: incident snapshot, 404 on unknown incident, optional fields."""

from decimal import Decimal

import pytest

from hsrecords.extensions import db
from hsrecords.models import Capa
from hsrecords.services.capa_service import SNAPSHOT_FIELDS


@pytest.fixture
def capa_payload(incident):
    return {
        "incident_id": incident.id,
        "description": "Guard interlock missing",
        "action_taken": "Installed interlock, retrained crew",
    }


class TestCreateCapa:

    def test_snapshot_matches_incident(self, client, user_headers, incident, capa_payload):
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 201

        capa = db.session.get(Capa, resp.get_json()["id"])
        assert capa.incident_id == incident.id
        for field in SNAPSHOT_FIELDS:
            assert getattr(capa, field) == getattr(incident, field), field
        assert capa.assigned_to_id is None
        assert capa.cost_amount is None
        assert capa.cost_currency is None

    def test_unknown_incident_404(self, client, user_headers, capa_payload):
        capa_payload["incident_id"] = 9999
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Incident not found"}
        assert db.session.query(Capa).count() == 0

    @pytest.mark.parametrize("field", ["incident_id", "description", "action_taken"])
    def test_required_fields(self, client, user_headers, capa_payload, field):
        capa_payload[field] = ""
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 400
        assert db.session.query(Capa).count() == 0

    def test_optional_fields(self, client, user_headers, admin_user, capa_payload):
        capa_payload.update(assigned_to_id=admin_user.id, cost_amount="1250.5", cost_currency="USD")
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 201
        capa = db.session.get(Capa, resp.get_json()["id"])
        assert capa.assigned_to_id == admin_user.id
        assert capa.cost_amount == Decimal("1250.50")
        assert capa.cost_currency == "USD"

    def test_blank_cost_is_null(self, client, user_headers, capa_payload):
        capa_payload.update(cost_amount="", cost_currency="")
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        capa = db.session.get(Capa, resp.get_json()["id"])
        assert capa.cost_amount is None
        assert capa.cost_currency is None

    def test_non_numeric_cost_rejected(self, client, user_headers, capa_payload):
        capa_payload["cost_amount"] = "lots"
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 400

    @pytest.mark.parametrize("amount", ["1e30", "10000000000", -1e12])
    def test_out_of_range_cost_rejected(self, client, user_headers, capa_payload, amount):
        capa_payload["cost_amount"] = amount
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "cost_amount is out of range"}
        assert db.session.query(Capa).count() == 0

    def test_largest_cost_accepted(self, client, user_headers, capa_payload):
        capa_payload["cost_amount"] = "9999999999.99"
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 201
        assert db.session.get(Capa, resp.get_json()["id"]).cost_amount == Decimal("9999999999.99")

    @pytest.mark.parametrize("field", ["incident_id", "assigned_to_id"])
    def test_out_of_range_id_rejected(self, client, user_headers, capa_payload, field):
        capa_payload[field] = "99999999999999999999"
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": f"{field} is out of range"}
        assert db.session.query(Capa).count() == 0

    def test_unknown_assignee_rejected(self, client, user_headers, capa_payload):
        capa_payload["assigned_to_id"] = 9999
        resp = client.post("/api/capa", json=capa_payload, headers=user_headers)
        assert resp.status_code == 400
        assert db.session.query(Capa).count() == 0

    def test_many_capas_per_incident(self, client, user_headers, incident, capa_payload):
        for _ in range(3):
            assert client.post("/api/capa", json=capa_payload, headers=user_headers).status_code == 201
        assert len(incident.capas) == 3


class TestListCapa:

    def test_list_includes_relations(self, client, user_headers, admin_user, incident, capa_payload):
        capa_payload["assigned_to_id"] = admin_user.id
        client.post("/api/capa", json=capa_payload, headers=user_headers)

        resp = client.get("/api/capa", headers=user_headers)
        assert resp.status_code == 200
        item = resp.get_json()["items"][0]
        assert item["incident"]["id"] == incident.id
        assert item["assigned_to"] == {"id": admin_user.id, "username": "admin", "name": "Admin"}
        assert item["site"] == incident.site

    def test_limit(self, client, user_headers, capa_payload):
        for _ in range(4):
            client.post("/api/capa", json=capa_payload, headers=user_headers)
        items = client.get("/api/capa?limit=3", headers=user_headers).get_json()["items"]
        assert len(items) == 3
        assert items[0]["id"] > items[-1]["id"]

"""Lookup tables: filtered listings, upsert semantics, hard/soft removal."""

import pytest
from sqlalchemy import text

from hsrecords.extensions import db
from hsrecords.models import LookupItem
from hsrecords.services import lookup_service


@pytest.fixture
def lookup_reference(app):
    """A table holding a real foreign key to lookup_items, so hard deletes fail."""
    db.session.execute(text(
        "CREATE TABLE lookup_refs ("
        "id INTEGER PRIMARY KEY, "
        "item_id INTEGER NOT NULL REFERENCES lookup_items(id))"
    ))
    db.session.commit()

    def add(item_id):
        db.session.execute(text("INSERT INTO lookup_refs (item_id) VALUES (:item_id)"), {"item_id": item_id})
        db.session.commit()

    yield add

    db.session.rollback()
    db.session.execute(text("DROP TABLE lookup_refs"))
    db.session.commit()


@pytest.fixture
def seeded_lookups(app):
    rows = [
        LookupItem(type="site", value="plant-b", label="Plant B", order=2),
        LookupItem(type="site", value="plant-a", label="Plant A", order=1),
        LookupItem(type="site", value="annex", label="Annex", order=None),
        LookupItem(type="site", value="closed", label="Closed site", order=0, active=False),
        LookupItem(type="shift", value="night", label="Night"),
        LookupItem(type="shift", value="morning", label="Morning"),
        LookupItem(type="severity", value="low", label="Low", order=1),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


class TestListLookups:

    def test_by_type_active_sorted(self, client, user_headers, seeded_lookups):
        resp = client.get("/api/lookups?type=site", headers=user_headers)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["type"] == "site"
        assert [i["value"] for i in data["items"]] == ["plant-a", "plant-b", "annex"]

    def test_by_types_grouped(self, client, user_headers, seeded_lookups):
        resp = client.get("/api/lookups?types=shift,%20site,unknown", headers=user_headers)
        items = resp.get_json()["items"]
        assert set(items) == {"shift", "site"}
        assert [i["label"] for i in items["shift"]] == ["Morning", "Night"]
        assert "closed" not in [i["value"] for i in items["site"]]

    def test_all_includes_inactive(self, client, admin_headers, seeded_lookups):
        items = client.get("/api/lookups", headers=admin_headers).get_json()["items"]
        assert len(items) == len(seeded_lookups)
        assert [i["type"] for i in items] == sorted(i["type"] for i in items)
        assert any(i["value"] == "closed" and i["active"] is False for i in items)


class TestUpsertLookup:

    def test_create(self, client, admin_headers):
        resp = client.post(
            "/api/lookups",
            json={"type": "site", "value": "plant-c", "label": "Plant C", "order": 3},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        item = db.session.get(LookupItem, resp.get_json()["id"])
        assert (item.type, item.value, item.label, item.order, item.active) == ("site", "plant-c", "Plant C", 3, True)

    def test_repeat_updates_instead_of_erroring(self, client, admin_headers):
        first = client.post(
            "/api/lookups",
            json={"type": "site", "value": "plant-c", "label": "Plant C", "order": 3},
            headers=admin_headers,
        )
        second = client.post(
            "/api/lookups",
            json={"type": "site", "value": "plant-c", "label": "Plant C (North)", "order": 1, "active": False},
            headers=admin_headers,
        )
        assert first.status_code == second.status_code == 201
        assert first.get_json()["id"] == second.get_json()["id"]

        rows = db.session.query(LookupItem).filter_by(type="site", value="plant-c").all()
        assert len(rows) == 1
        assert rows[0].label == "Plant C (North)"
        assert rows[0].order == 1
        assert rows[0].active is False

    def test_reactivate_by_upsert(self, app, seeded_lookups):
        lookup_service.upsert_item("site", "closed", "Closed site")
        assert "closed" in [i.value for i in lookup_service.list_by_type("site")]

    @pytest.mark.parametrize(
        "body",
        [
            {"value": "x", "label": "X"},
            {"type": "site", "label": "X"},
            {"type": "site", "value": "x"},
            {"type": "site", "value": "  ", "label": "X"},
        ],
    )
    def test_missing_fields(self, client, admin_headers, body):
        resp = client.post("/api/lookups", json=body, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Missing type/value/label"}

    def test_bad_order(self, client, admin_headers):
        resp = client.post(
            "/api/lookups",
            json={"type": "site", "value": "x", "label": "X", "order": "first"},
            headers=admin_headers,
        )
        assert resp.status_code == 400


class TestRemoveLookup:

    def test_hard_delete(self, client, admin_headers, lookup_item):
        item_id = lookup_item.id
        resp = client.delete(f"/api/lookups/{item_id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"ok": True, "result": "deleted"}
        assert db.session.get(LookupItem, item_id) is None

    def test_falls_back_to_deactivate(self, client, admin_headers, lookup_item, lookup_reference):
        item_id = lookup_item.id
        lookup_reference(item_id)
        resp = client.delete(f"/api/lookups/{item_id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"ok": True, "result": "deactivated"}

        item = db.session.get(LookupItem, item_id)
        assert item is not None
        assert item.active is False

    def test_try_hard_delete_reports_constraint(self, lookup_item, lookup_reference):
        lookup_reference(lookup_item.id)
        assert lookup_service.try_hard_delete(lookup_item) is False
        assert db.session.query(LookupItem).count() == 1

    def test_unknown_id(self, client, admin_headers):
        resp = client.delete("/api/lookups/424242", headers=admin_headers)
        assert resp.status_code == 404

    def test_deactivated_item_hidden_from_type_listing(self, app, lookup_item):
        lookup_service.deactivate(lookup_item)
        assert lookup_service.list_by_type("site") == []
        assert lookup_service.list_all() == [lookup_item]

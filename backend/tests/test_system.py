"""Health checks, CORS headers and CLI bootstrap."""

from hsrecords.extensions import db
from hsrecords.models import LookupItem, User, UserRole
from hsrecords.services import auth_service


class TestDbPing:

    def test_failure_reported(self, client, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("connection refused")

        monkeypatch.setattr(db.session, "execute", broken)
        resp = client.get("/api/db/ping")
        assert resp.status_code == 500
        data = resp.get_json()
        assert data["ok"] is False
        assert "connection refused" in data["error"]


class TestCors:

    def test_allowed_origin(self, client):
        resp = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"

    def test_unknown_origin(self, client):
        resp = client.get("/health", headers={"Origin": "http://evil.example"})
        assert "Access-Control-Allow-Origin" not in resp.headers


class TestCli:

    def test_seed_is_idempotent(self, app):
        runner = app.test_cli_runner()
        for _ in range(2):
            result = runner.invoke(args=["system", "seed", "--admin-password", "a1", "--user-password", "u1"])
            assert result.exit_code == 0, result.output

        assert db.session.query(User).count() == 2
        admin = db.session.query(User).filter_by(username="admin").one()
        assert admin.role == UserRole.ADMIN
        assert auth_service.verify_password("a1", admin.password_hash)
        assert db.session.query(LookupItem).filter_by(type="currency").count() == 5

    def test_create_user_and_grant(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["users", "create", "--username", "jdoe", "--password", "pw", "--role", "user"])
        assert result.exit_code == 0, result.output
        assert "PASS" in result.output

        result = runner.invoke(args=["users", "grant", "jdoe", "/dashboard/capa", "--exact"])
        assert "PASS" in result.output

        user = db.session.query(User).filter_by(username="jdoe").one()
        assert user.role == UserRole.USER
        assert [(g.path, g.is_prefix) for g in user.route_access] == [("/dashboard/capa", False)]

    def test_create_duplicate_user(self, app, regular_user):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["users", "create", "--username", "worker", "--password", "pw"])
        assert "FAIL" in result.output

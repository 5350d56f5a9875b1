"""
Pytest fixtures for the health and safety records backend.

Provides a fresh in-memory database per test, the Flask test client,
admin and regular users, and helpers for Authorization headers.
"""

import pytest

from hsrecords import create_app
from hsrecords.extensions import db
from hsrecords.models import User, UserRole, RouteAccess, Incident, LookupItem
from hsrecords.services.auth_service import hash_password


ADMIN_PASSWORD = "admin-pass"
USER_PASSWORD = "user-pass"


@pytest.fixture(scope='function')
def app():
    """Create application with an empty in-memory database."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def admin_user(app):
    user = User(
        username="admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        name="Admin",
        email="admin@example.local",
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(scope='function')
def regular_user(app):
    user = User(
        username="worker",
        password_hash=hash_password(USER_PASSWORD),
        role=UserRole.USER,
        name="Field Worker",
        email="worker@example.local",
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(scope='function')
def admin_headers(client, admin_user):
    return auth_headers(get_auth_token(client, "admin", ADMIN_PASSWORD))


@pytest.fixture(scope='function')
def user_headers(client, regular_user):
    return auth_headers(get_auth_token(client, "worker", USER_PASSWORD))


@pytest.fixture(scope='function')
def grant(app):
    """Factory: grant(user, path, is_prefix=True) -> RouteAccess."""
    def _grant(user, path, is_prefix=True):
        access = RouteAccess(user_id=user.id, path=path, is_prefix=is_prefix)
        db.session.add(access)
        db.session.commit()
        return access
    return _grant


@pytest.fixture(scope='function')
def incident_payload():
    return {
        "site": "plant-a",
        "date": "2025-03-14T00:00:00.000Z",
        "time": "08:30",
        "incident_area": "production",
        "incident_category": "near-miss",
        "shift": "morning",
        "severity": "medium",
        "personnel_type": "employee",
        "injury_area": "hand",
        "operational_category": "mechanical",
        "description": "Guard left open on press 4",
    }


@pytest.fixture(scope='function')
def incident(client, user_headers, incident_payload):
    """An incident reported through the API by the regular user."""
    resp = client.post("/api/incidents", json=incident_payload, headers=user_headers)
    assert resp.status_code == 201
    return db.session.get(Incident, resp.get_json()["id"])


@pytest.fixture(scope='function')
def lookup_item(app):
    item = LookupItem(type="site", value="plant-a", label="Plant A", order=1)
    db.session.add(item)
    db.session.commit()
    return item


def get_auth_token(client, username: str, password: str) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })
    if response.status_code == 200:
        return response.get_json().get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}

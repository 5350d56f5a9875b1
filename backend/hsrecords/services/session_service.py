# Overview: Service-layer operations for session tokens; issues and reads signed JWTs.

"""
Stateless session tokens.

A session is a JWT (HS256) signed with the server secret. The claims carry
everything request handling needs (user id, role, username, display
fields), so a valid token is turned into a SessionIdentity without touching
the database. Role changes and deletions therefore take effect when the
token expires.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import jwt  # PyJWT
from flask import current_app

from ..models import UserRole
from ..time_utils import utcnow


JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionIdentity:
    """
    Who is making the request, as asserted by the session token.

    Built once per request by the auth decorator and stored on flask.g.
    """
    id: int
    username: str
    role: str
    name: str | None = None
    email: str | None = None
    image: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "name": self.name,
            "email": self.email,
            "image": self.image,
        }


def _signing_key() -> str:
    return current_app.config.get("JWT_SECRET_KEY") or current_app.config["SECRET_KEY"]


def issue_token(identity: SessionIdentity) -> str:
    """
    Create a signed session token for ``identity``.

    ``sub`` is the user id as a string (PyJWT requires a string subject).
    """
    now = utcnow()
    lifetime = timedelta(hours=current_app.config.get("JWT_LIFETIME_HOURS", 12))
    payload = {
        "sub": str(identity.id),
        "role": identity.role,
        "username": identity.username,
        "name": identity.name,
        "email": identity.email,
        "image": identity.image,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, _signing_key(), algorithm=JWT_ALGORITHM)


def read_token(token: str) -> SessionIdentity | None:
    """
    Verify ``token`` and rebuild the identity from its claims.

    Returns None for a bad signature, an expired token, or claims that do
    not describe a user.
    """
    try:
        claims = jwt.decode(
            token,
            _signing_key(),
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError:
        return None

    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError):
        return None

    username = claims.get("username")
    role = claims.get("role")
    if not username or role not in UserRole.ALL:
        return None

    return SessionIdentity(
        id=user_id,
        username=username,
        role=role,
        name=claims.get("name"),
        email=claims.get("email"),
        image=claims.get("image"),
    )

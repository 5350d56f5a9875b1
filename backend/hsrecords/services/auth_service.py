# Overview: Service-layer operations for auth; password hashing and credential checks.

"""
Credential verification.

Passwords are hashed with bcrypt (cost factor 10). authenticate() only
answers "are these credentials valid" and returns the identity to embed in
the session token; issuing the token is the caller's job.
"""

import bcrypt

from ..extensions import db
from ..models import User
from .session_service import SessionIdentity


BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Hash password using bcrypt with cost factor 10."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def identity_for(user: User) -> SessionIdentity:
    return SessionIdentity(
        id=user.id,
        username=user.username,
        role=user.role,
        name=user.name or user.username,
        email=user.email,
        image=user.image,
    )


def authenticate(username: str | None, password: str | None) -> SessionIdentity | None:
    """
    Authenticate user with username and password.

    Returns the SessionIdentity if credentials are valid, None otherwise.
    Callers must not distinguish between an unknown username and a wrong
    password.

    Missing username or password short-circuits before any lookup.
    """
    if not username or not password:
        return None

    user = db.session.query(User).filter(User.username == username).first()
    if not user or not user.password_hash:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return identity_for(user)

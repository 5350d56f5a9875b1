# Overview: Service-layer operations for users and their route grants.

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import User, RouteAccess, UserRole
from ..validation import (
    ValidationError,
    ConflictError,
    NotFoundError,
    clean_optional_text,
    coerce_role,
)
from .auth_service import hash_password


def list_users() -> list[User]:
    return db.session.query(User).order_by(User.username.asc()).all()


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def create_user(
    username: str,
    password: str,
    role: str = UserRole.USER,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Username uniqueness is exact (case-sensitive). A duplicate raises
    ConflictError and leaves the table untouched.
    """
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("username and password are required")

    existing = db.session.query(User).filter(User.username == username).first()
    if existing:
        raise ConflictError("username already exists")

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=coerce_role(role),
        name=clean_optional_text(name),
        email=clean_optional_text(email),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent create of the same username
        db.session.rollback()
        raise ConflictError("username already exists")
    return user


def update_user(user_id: int, changes: dict) -> User:
    """
    Apply a partial update.

    Only string values are considered. name/email: trimmed, empty -> None.
    username: applied when non-blank. role: coerced to ADMIN/USER.
    password: re-hashed when non-empty.
    """
    user = get_user(user_id)

    if isinstance(changes.get("name"), str):
        user.name = clean_optional_text(changes["name"])
    if isinstance(changes.get("email"), str):
        user.email = clean_optional_text(changes["email"])
    if isinstance(changes.get("role"), str):
        user.role = coerce_role(changes["role"])

    new_username = changes.get("username")
    if isinstance(new_username, str) and new_username.strip():
        new_username = new_username.strip()
        if new_username != user.username:
            taken = db.session.query(User).filter(
                User.username == new_username,
                User.id != user.id,
            ).first()
            if taken:
                raise ConflictError("username already exists")
            user.username = new_username

    new_password = changes.get("password")
    if isinstance(new_password, str) and new_password:
        user.password_hash = hash_password(new_password)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("username already exists")
    return user


def delete_user(user_id: int, acting_user_id: int) -> None:
    """
    Delete a user and its route grants.

    An admin cannot delete the account they are signed in with.
    """
    if user_id == acting_user_id:
        raise ValidationError("You cannot delete your own account while signed in")

    user = get_user(user_id)
    db.session.delete(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("User is referenced by incidents or CAPA records and cannot be deleted")


# =============================================================================
# ROUTE GRANTS
# =============================================================================

def list_route_access(user_id: int) -> list[RouteAccess]:
    get_user(user_id)
    return db.session.query(RouteAccess).filter(
        RouteAccess.user_id == user_id
    ).order_by(RouteAccess.path.asc()).all()


def grant_route_access(user_id: int, path: str, is_prefix: bool = True) -> RouteAccess:
    """Upsert on (user_id, path); a repeat grant only updates is_prefix."""
    path = (path or "").strip()
    if not path:
        raise ValidationError("Missing path")

    get_user(user_id)

    grant = db.session.query(RouteAccess).filter_by(user_id=user_id, path=path).first()
    if grant:
        grant.is_prefix = is_prefix
    else:
        grant = RouteAccess(user_id=user_id, path=path, is_prefix=is_prefix)
        db.session.add(grant)

    db.session.commit()
    return grant


def revoke_route_access(grant_id: int) -> None:
    grant = db.session.get(RouteAccess, grant_id)
    if not grant:
        raise NotFoundError("Route grant not found")
    db.session.delete(grant)
    db.session.commit()

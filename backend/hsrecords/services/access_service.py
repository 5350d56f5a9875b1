# Overview: Service-layer operations for route access; evaluates per-user path grants.

"""
Route access policy.

- No identity: deny.
- ADMIN: allow everything.
- USER: allow if any RouteAccess row owned by the user matches the path.
  Prefix grants use a plain string prefix, so "/report" also matches
  "/report-incident". There is no most-specific-wins rule; one match is
  enough.
"""

from __future__ import annotations

from typing import Iterable

from ..extensions import db
from ..models import RouteAccess
from ..validation import ValidationError
from .session_service import SessionIdentity


def path_matches(grant: RouteAccess, path: str) -> bool:
    if grant.is_prefix:
        return path.startswith(grant.path)
    return path == grant.path


def any_grant_matches(grants: Iterable[RouteAccess], path: str) -> bool:
    return any(path_matches(grant, path) for grant in grants)


def grants_for(user_id: int) -> list[RouteAccess]:
    return db.session.query(RouteAccess).filter(RouteAccess.user_id == user_id).all()


def is_allowed(identity: SessionIdentity | None, path: str) -> bool:
    """
    Decide whether ``identity`` may open ``path``.

    Raises ValidationError for an empty path; that is bad input, not a
    denial.
    """
    if not path:
        raise ValidationError("Missing path")

    if identity is None:
        return False

    if identity.is_admin:
        return True

    return any_grant_matches(grants_for(identity.id), path)

from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class UserRole:
    """Account roles. Exactly one per user."""
    ADMIN = "ADMIN"
    USER = "USER"

    ALL = (ADMIN, USER)


class User(db.Model):
    """
    User accounts for authentication and attribution.

    Admins bypass route grants; regular users only reach the UI paths
    listed in their RouteAccess rows.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.CheckConstraint("role IN ('ADMIN', 'USER')", name="ck_users_role"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), nullable=False, unique=True, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(16), nullable=False, default=UserRole.USER)

    name = db.Column(db.String(120), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    image = db.Column(db.String(512), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    route_access = db.relationship(
        "RouteAccess",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RouteAccess.path",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "email": self.email,
            "image": self.image,
            "role": self.role,
            "created_at": to_utc_z(self.created_at),
        }

    def to_summary_dict(self) -> dict:
        """Minimal shape for pickers and embedded references."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
        }


class RouteAccess(db.Model):
    """
    Per-user UI route grant.

    is_prefix=True grants every path that starts with ``path`` (raw string
    prefix, not segment-aware); is_prefix=False grants ``path`` exactly.
    """
    __tablename__ = "route_access"
    __table_args__ = (
        db.UniqueConstraint("user_id", "path", name="uq_route_access_user_path"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    path = db.Column(db.String(255), nullable=False)
    is_prefix = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    user = db.relationship("User", back_populates="route_access")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "path": self.path,
            "is_prefix": self.is_prefix,
            "created_at": to_utc_z(self.created_at),
        }

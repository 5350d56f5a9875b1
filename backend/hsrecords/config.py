# backend/hsrecords/config.py
from __future__ import annotations
import os


def _split_origins(raw: str) -> set[str]:
    return {o.strip() for o in raw.split(",") if o.strip()}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Signing key for session tokens; falls back to SECRET_KEY when unset
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY")
    JWT_LIFETIME_HOURS = int(os.environ.get("JWT_LIFETIME_HOURS", "12"))

    # SQLite DB stored in backend/instance/hsrecords.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///hsrecords.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    CORS_ALLOWED_ORIGINS = _split_origins(os.environ.get(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    ))

    # Default page size for incident and CAPA listings
    DEFAULT_LIST_LIMIT = 10

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from flask import request

from .models import UserRole


MIN_INT64 = -(2 ** 63)
MAX_INT64 = 2 ** 63 - 1

# Numeric(12, 2) leaves 10 integer digits
MAX_MONEY = Decimal(10) ** 10


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate username)."""


class NotFoundError(LookupError):
    """404-level: a referenced record does not exist."""


def get_json_payload() -> dict:
    """
    Parse the request body as a JSON object.

    Raises ValidationError("Invalid JSON") for a missing, unparseable or
    non-object body so routes never see a half-parsed payload.
    """
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        raise ValidationError("Invalid JSON")
    return data


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require_fields(payload: dict, fields: Iterable[str]) -> None:
    """Reject the payload if any of ``fields`` is missing or blank."""
    missing = [f for f in fields if is_blank(payload.get(f))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def clean_text(value: Any) -> str:
    return str(value).strip()


def clean_optional_text(value: Any) -> str | None:
    """Trim a nullable text field; empty string becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_role(value: Any) -> str:
    """Case-insensitive ADMIN match, anything else is USER."""
    if isinstance(value, str) and value.strip().upper() == UserRole.ADMIN:
        return UserRole.ADMIN
    return UserRole.USER


def coerce_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ("", "false", "0", "no", "off")
    return bool(value)


def coerce_optional_int(value: Any, field: str) -> int | None:
    """Nullable integer input, bounded to what a 64-bit column can hold."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field} must be an integer")
        number = int(value)
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            raise ValidationError(f"{field} must be an integer")
    if not MIN_INT64 <= number <= MAX_INT64:
        raise ValidationError(f"{field} is out of range")
    return number


def coerce_optional_number(value: Any, field: str) -> float | None:
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


def coerce_optional_decimal(value: Any, field: str) -> Decimal | None:
    """Money amounts; stored as Numeric(12, 2)."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    try:
        amount = amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValidationError(f"{field} is out of range")
    if abs(amount) >= MAX_MONEY:
        raise ValidationError(f"{field} is out of range")
    return amount


def parse_limit(raw: str | None, default: int) -> int:
    """
    ?limit= handling for listings.

    Anything that is not a positive finite number falls back to ``default``;
    fractional values are truncated.
    """
    if raw is None:
        return default
    try:
        number = float(raw)
    except ValueError:
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return max(int(number), 1)

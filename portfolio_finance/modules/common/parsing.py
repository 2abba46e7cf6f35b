"""Coercion helpers for form-style payloads.

Browser forms (and offline-queued FormData) deliver every value as a string,
with empty strings for untouched inputs. These helpers normalise such values
into domain types and raise ``ValidationError`` on bad input.
"""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from .exceptions import ValidationError

CENT = Decimal("0.01")
_TRUE_VALUES = {"1", "true", "on", "yes"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_money(
    value: Any,
    field_name: str,
    *,
    required: bool = True,
    positive: bool = False,
) -> Decimal | None:
    """Parse a non-negative money value quantized to cents."""
    if _is_blank(value):
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a decimal")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a decimal") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a decimal")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    if positive and amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_text(value: Any, field_name: str, *, required: bool = False) -> str | None:
    if _is_blank(value):
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    return str(value).strip()


def parse_ref(value: Any) -> str | None:
    """Normalise an optional foreign key reference."""
    if _is_blank(value):
        return None
    return str(value).strip()


def parse_choice(value: Any, field_name: str, choices: Iterable[str], default: str | None = None) -> str:
    allowed = tuple(choices)
    if _is_blank(value):
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    text = str(value).strip()
    if text not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return text


def parse_date(value: Any, field_name: str, *, default: dt.date | None = None) -> dt.date | None:
    if _is_blank(value):
        return default
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    try:
        return dt.date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be an ISO date") from exc


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_blank(value):
        return False
    return str(value).strip().lower() in _TRUE_VALUES


MISSING: Any = object()


def lookup(data: Mapping[str, Any], *names: str) -> Any:
    """Return the first present key among ``names`` (snake_case and form camelCase)."""
    for name in names:
        if name in data:
            return data[name]
    return MISSING


def merged(data: Mapping[str, Any], current: Any, attr: str, *aliases: str) -> Any:
    """Value from ``data`` if submitted, else the current record's value on edits."""
    value = lookup(data, attr, *aliases)
    if value is MISSING:
        return getattr(current, attr) if current is not None else None
    return value


def client_id(data: Mapping[str, Any]) -> dict[str, str]:
    """Primary key chosen by an offline client so later queued edits can target it."""
    value = parse_ref(data.get("id"))
    return {"id": value} if value is not None else {}

from __future__ import annotations

import math
from datetime import MAXYEAR, MINYEAR, date
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.constants import MAX_NOTES_LENGTH
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_length_between(value: str, field_name: str, min_len: int, max_len: int) -> str:
    value = require_non_empty(value, field_name)
    require_min_length(value, field_name, min_len)
    require_max_length(value, field_name, max_len)
    return value


def require_enum(value, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def require_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip()[:10])
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format") from None


def require_non_negative(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_year(value, field_name: str = "Year") -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"{field_name} must be between {MINYEAR} and {MAXYEAR}")
    return year


def require_month(value, field_name: str = "Month") -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not 1 <= month <= 12:
        raise ValidationError(f"{field_name} must be between 1 and 12")
    return month


def clean_notes(value: Optional[str]) -> str:
    """Trim attendance notes; None and blank become ''."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Notes must be text")
    value = value.strip()
    require_max_length(value, "Notes", MAX_NOTES_LENGTH)
    return value

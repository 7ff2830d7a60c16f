from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str, max_len: Optional[int] = None) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    v = value.strip()
    if max_len is not None and len(v) > max_len:
        raise ValidationError(f"{field_name} may not be longer than {max_len} characters")
    return v


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    if len(email) > 191 or not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} must be a valid email address")
    return email


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    raw = (value or "").strip() if isinstance(value, str) else ""
    if not raw:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def optional_text(value: Optional[str], max_len: int = 100) -> Optional[str]:
    v = (value or "").strip()
    return v[:max_len] if v else None


class FormValidator:
    """Collects field errors so a form reports every problem at once."""

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    def check(self, field: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except ValidationError as e:
            self.errors.setdefault(field, str(e))
            return None

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, message)

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationError(errors=self.errors)

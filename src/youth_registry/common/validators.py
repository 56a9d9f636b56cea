from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_DIGITS_ONLY = re.compile(r"^[0-9]+$")
_NON_DIGIT = re.compile(r"[^0-9]")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} no es válido")
    return value.strip()


def is_digits(value: str) -> bool:
    return bool(_DIGITS_ONLY.match(value or ""))


def normalize_cedula(value: str) -> str:
    """Keep only digits, at most the rightmost 8."""
    return _NON_DIGIT.sub("", value or "")[-8:]


def normalize_phone(value: str) -> str:
    """Keep only digits, drop leading zeros, at most 10 digits."""
    return _NON_DIGIT.sub("", value or "").lstrip("0")[:10]

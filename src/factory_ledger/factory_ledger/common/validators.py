from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_matching(value: str, confirmation: str, field_name: str) -> str:
    if value != confirmation:
        raise ValidationError(f"{field_name} confirmation does not match")
    return value


def parse_amount(value: Any, field_name: str = "Amount") -> float:
    """Parse a currency amount from user input.

    Accepts numbers or numeric strings; rejects negatives, NaN and infinity.
    """

    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            raise ValidationError(f"{field_name} is required")
        try:
            amount = float(text)
        except ValueError:
            raise ValidationError(f"{field_name} must be a number")

    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount

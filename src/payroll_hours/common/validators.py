from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Type

from ..core.exceptions import DomainError, ValidationError


def require_decimal(value, field_name: str, *, error: Type[DomainError] = ValidationError) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise error(f"{field_name} is not a number: {value!r}")


def require_positive(value, field_name: str, *, error: Type[DomainError] = ValidationError) -> Decimal:
    number = require_decimal(value, field_name, error=error)
    if not number.is_finite() or number <= 0:
        raise error(f"{field_name} must be greater than zero")
    return number


def require_non_negative(value, field_name: str, *, error: Type[DomainError] = ValidationError) -> Decimal:
    number = require_decimal(value, field_name, error=error)
    if not number.is_finite() or number < 0:
        raise error(f"{field_name} must not be negative")
    return number

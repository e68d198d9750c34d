"""
Shared precondition checks.

Every check raises PreconditionError before any property or process
calculation runs, so callers never see partially computed results.
"""

import math
from typing import Optional

from hvacengine.exceptions import PreconditionError


def require_finite(name: str, value: float) -> float:
    if value is None or not math.isfinite(value):
        raise PreconditionError(f"{name} must be a finite number, got {value}")
    return value


def require_in_range(
    name: str, value: float, lower: float, upper: float, unit: str = ""
) -> float:
    """Check lower <= value <= upper."""
    require_finite(name, value)
    if value < lower or value > upper:
        suffix = f" {unit}" if unit else ""
        raise PreconditionError(
            f"{name} must be between {lower} and {upper}{suffix}, got {value}"
        )
    return value


def require_non_negative(name: str, value: float) -> float:
    require_finite(name, value)
    if value < 0.0:
        raise PreconditionError(f"{name} must not be negative, got {value}")
    return value


def require_positive(name: str, value: float) -> float:
    require_finite(name, value)
    if value <= 0.0:
        raise PreconditionError(f"{name} must be greater than zero, got {value}")
    return value


def require_not_greater(
    name: str, value: float, limit: float, hint: Optional[str] = None
) -> float:
    require_finite(name, value)
    if value > limit:
        message = f"{name} must not exceed {limit}, got {value}"
        if hint:
            message = f"{message}. {hint}"
        raise PreconditionError(message)
    return value


def require_not_lower(
    name: str, value: float, limit: float, hint: Optional[str] = None
) -> float:
    require_finite(name, value)
    if value < limit:
        message = f"{name} must not be lower than {limit}, got {value}"
        if hint:
            message = f"{message}. {hint}"
        raise PreconditionError(message)
    return value

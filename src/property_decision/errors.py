"""
Engine error types and the shared division guard.

Division policy: a ratio with a zero (or negative) denominator is reported
as ``math.inf`` ("unbounded") when the numerator is positive, and 0.0 when
the numerator is zero. It never raises and never returns NaN.
"""

import math


class InvalidInputError(ValueError):
    """A numeric argument violates the engine's contract (negative, non-finite, ...)."""

    def __init__(self, field: str, value: float, reason: str = "must be non-negative"):
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason}, got {value!r}")


def require_non_negative(field: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInputError(field, value, "must be a finite number")
    if value < 0:
        raise InvalidInputError(field, value)
    return value


def require_positive(field: str, value: float) -> float:
    require_non_negative(field, value)
    if value == 0:
        raise InvalidInputError(field, value, "must be positive")
    return value


def unbounded_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, with math.inf for a non-positive denominator."""
    if numerator == 0:
        return 0.0
    if denominator <= 0:
        return math.inf if numerator > 0 else -math.inf
    return numerator / denominator

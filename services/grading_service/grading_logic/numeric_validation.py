"""Input checks shared by the pure grade calculators."""

from __future__ import annotations

import math
from typing import Any

from gradebook_service_libs.error_handling import raise_invalid_input

from services.grading_service.constants import SERVICE_NAME


def require_non_negative(value: Any, field: str, operation: str) -> float:
    """Return value as float, raising INVALID_INPUT for non-numeric, NaN, inf or negative."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise_invalid_input(
            service=SERVICE_NAME,
            operation=operation,
            field=field,
            message=f"{field} must be a number, got {type(value).__name__}",
            value=repr(value),
        )
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise_invalid_input(
            service=SERVICE_NAME,
            operation=operation,
            field=field,
            message=f"{field} must be a finite number",
            value=repr(value),
        )
    if number < 0:
        raise_invalid_input(
            service=SERVICE_NAME,
            operation=operation,
            field=field,
            message=f"{field} cannot be negative",
            value=number,
        )
    return number

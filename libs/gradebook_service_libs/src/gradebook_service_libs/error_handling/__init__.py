"""Structured error handling for grading services."""

from .factories import create_error_detail_with_context, raise_resource_not_found
from .gradebook_error import GradebookError
from .grading_factories import (
    raise_dependency_unavailable,
    raise_duplicate_attempt,
    raise_invalid_input,
    raise_invalid_state_transition,
    raise_score_out_of_range,
    raise_unknown_letter,
)

__all__ = [
    "GradebookError",
    "create_error_detail_with_context",
    "raise_dependency_unavailable",
    "raise_duplicate_attempt",
    "raise_invalid_input",
    "raise_invalid_state_transition",
    "raise_resource_not_found",
    "raise_score_out_of_range",
    "raise_unknown_letter",
]

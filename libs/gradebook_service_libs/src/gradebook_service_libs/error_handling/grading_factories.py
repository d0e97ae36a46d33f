"""
Grading-specific error factories.

Each helper raises a GradebookError whose ErrorDetail carries a
GradingErrorCode and the identifiers needed to diagnose the failure.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from gradebook_core.error_enums import GradingErrorCode

from .factories import create_error_detail_with_context
from .gradebook_error import GradebookError


def _raise(
    error_code: GradingErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None,
    details: dict[str, Any],
) -> NoReturn:
    raise GradebookError(
        create_error_detail_with_context(
            error_code=error_code,
            message=message,
            service=service,
            operation=operation,
            correlation_id=correlation_id,
            details=details,
        )
    )


def raise_invalid_input(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID | None = None,
    value: Any = None,
    **additional_context: Any,
) -> NoReturn:
    """Malformed numeric or structural input to a calculator or state machine."""
    details: dict[str, Any] = {"field": field, **additional_context}
    if value is not None:
        details["value"] = value
    _raise(GradingErrorCode.INVALID_INPUT, message, service, operation, correlation_id, details)


def raise_invalid_state_transition(
    service: str,
    operation: str,
    attempt_id: str,
    current_status: str,
    trigger: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    message = f"Cannot {trigger} exam attempt '{attempt_id}' in status '{current_status}'"
    _raise(
        GradingErrorCode.INVALID_STATE_TRANSITION,
        message,
        service,
        operation,
        correlation_id,
        {
            "attempt_id": attempt_id,
            "current_status": current_status,
            "trigger": trigger,
            **additional_context,
        },
    )


def raise_duplicate_attempt(
    service: str,
    operation: str,
    exam_id: str,
    student_id: str,
    existing_attempt_id: str,
    existing_status: str,
    correlation_id: UUID | None = None,
) -> NoReturn:
    message = (
        f"Student '{student_id}' already has attempt '{existing_attempt_id}' "
        f"({existing_status}) for exam '{exam_id}'"
    )
    _raise(
        GradingErrorCode.DUPLICATE_ATTEMPT,
        message,
        service,
        operation,
        correlation_id,
        {
            "exam_id": exam_id,
            "student_id": student_id,
            "existing_attempt_id": existing_attempt_id,
            "existing_status": existing_status,
        },
    )


def raise_score_out_of_range(
    service: str,
    operation: str,
    attempt_id: str,
    score: float,
    max_score: float,
    message: str | None = None,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    _raise(
        GradingErrorCode.SCORE_OUT_OF_RANGE,
        message or f"Score {score} is outside 0..{max_score} for attempt '{attempt_id}'",
        service,
        operation,
        correlation_id,
        {"attempt_id": attempt_id, "score": score, "max_score": max_score, **additional_context},
    )


def raise_unknown_letter(
    service: str,
    operation: str,
    letter: str,
    scale_id: str,
    correlation_id: UUID | None = None,
) -> NoReturn:
    _raise(
        GradingErrorCode.UNKNOWN_LETTER,
        f"Letter grade '{letter}' is not defined in scale '{scale_id}'",
        service,
        operation,
        correlation_id,
        {"letter": letter, "scale_id": scale_id},
    )


def raise_dependency_unavailable(
    service: str,
    operation: str,
    dependency: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """A storage collaborator call failed."""
    _raise(
        GradingErrorCode.DEPENDENCY_UNAVAILABLE,
        message,
        service,
        operation,
        correlation_id,
        {"dependency": dependency, **additional_context},
    )

"""
Generic error factories.

create_error_detail_with_context builds an ErrorDetail for code paths that
report errors as values; raise_* helpers build and raise a GradebookError.
"""

from __future__ import annotations

import traceback
from typing import Any, NoReturn
from uuid import UUID, uuid4

from gradebook_core.error_enums import ErrorCode, GradingErrorCode
from gradebook_core.models.error_models import ErrorDetail

from .gradebook_error import GradebookError


def create_error_detail_with_context(
    error_code: ErrorCode | GradingErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
    capture_stack: bool = False,
) -> ErrorDetail:
    """
    Create an ErrorDetail with consistent context.

    Args:
        error_code: Generic or grading-specific error code
        message: Human-readable error message
        service: Name of the service raising the error
        operation: Operation that failed
        correlation_id: Correlation id; a new one is generated when omitted
        details: Additional structured context
        capture_stack: Attach the current stack trace
    """
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid4(),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace="".join(traceback.format_stack()) if capture_stack else None,
    )


def raise_resource_not_found(
    service: str,
    operation: str,
    resource_type: str,
    resource_id: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise RESOURCE_NOT_FOUND with an auto-generated message."""
    detail = create_error_detail_with_context(
        error_code=ErrorCode.RESOURCE_NOT_FOUND,
        message=f"{resource_type} with ID '{resource_id}' not found",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"resource_type": resource_type, "resource_id": resource_id, **additional_context},
    )
    raise GradebookError(detail)

"""Structured error payload shared by every grading component.

ErrorDetail is carried by GradebookError and returned inside per-student
batch outcomes, so a failure can be reported without raising.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..error_enums import ErrorCode, GradingErrorCode


class ErrorDetail(BaseModel):
    """Canonical error description.

    Attributes:
        error_code: Generic ErrorCode or GradingErrorCode
        message: Human-readable description
        correlation_id: Correlates the error with the operation that raised it
        timestamp: UTC time the error was created
        service: Service that raised the error
        operation: Operation within the service
        details: Additional structured context (field names, ids, values)
        stack_trace: Optional formatted stack trace
    """

    model_config = ConfigDict(frozen=True)

    error_code: ErrorCode | GradingErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    stack_trace: str | None = None

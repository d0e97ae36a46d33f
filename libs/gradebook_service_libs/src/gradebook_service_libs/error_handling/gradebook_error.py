"""
GradebookError - the single exception type raised by grading components.

All domain failures are described by an ErrorDetail; callers branch on
error_code rather than on exception subclasses.
"""

from __future__ import annotations

from typing import Any

from gradebook_core.models.error_models import ErrorDetail


class GradebookError(Exception):
    """Exception carrying a structured ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.error_detail.message}"

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def details(self) -> dict[str, Any]:
        return self.error_detail.details

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging or API error bodies."""
        return self.error_detail.model_dump(mode="json")

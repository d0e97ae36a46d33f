"""
gradebook_core.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    PROCESSING_ERROR = "PROCESSING_ERROR"  # Internal processing failures


class GradingErrorCode(str, Enum):
    """
    Business logic specific error codes for grading and exam scoring.

    Note: Lookups of missing exams/attempts use the generic
    ErrorCode.RESOURCE_NOT_FOUND.
    """

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    DUPLICATE_ATTEMPT = "DUPLICATE_ATTEMPT"
    SCORE_OUT_OF_RANGE = "SCORE_OUT_OF_RANGE"
    UNKNOWN_LETTER = "UNKNOWN_LETTER"
    DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"

"""Status enums for exam attempts and grade calculations.

ExamAttemptStatus: Lifecycle of one student's attempt at one exam.
GradeCalculationMethod: How a GradeRecord's final grade was produced.
"""

from __future__ import annotations

from enum import Enum


class ExamAttemptStatus(str, Enum):
    """Exam attempt state machine: IN_PROGRESS -> SUBMITTED -> GRADED.

    GRADED is terminal. An attempt reaches GRADED either through a manual
    score or automatically when the exam has no short-answer questions.
    """

    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    GRADED = "graded"

    @classmethod
    def terminal(cls) -> set[ExamAttemptStatus]:
        """Return terminal states (no further transitions)."""
        return {cls.GRADED}


class GradeCalculationMethod(str, Enum):
    WEIGHTED_AVERAGE = "weighted_average"
    SIMPLE_AVERAGE = "simple_average"
    MANUAL = "manual"

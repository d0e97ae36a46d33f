"""
gradebook_core.domain_enums - Enums describing the grading domain.
"""

from __future__ import annotations

from enum import Enum


class QuestionKind(str, Enum):
    """Exam question types. Only SHORT_ANSWER requires a human grader."""

    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    SHORT_ANSWER = "short_answer"

    @property
    def is_auto_gradable(self) -> bool:
        return self is not QuestionKind.SHORT_ANSWER


class GradeCategory(str, Enum):
    """Categories combined into a course's final grade."""

    ASSIGNMENTS = "assignments"
    EXAMS = "exams"
    PARTICIPATION = "participation"

"""Credit-weighted grade point average."""

from __future__ import annotations

from collections.abc import Sequence

from gradebook_core.grade_models import CourseGradePoints, GpaSummary
from gradebook_service_libs.logging_utils import create_service_logger

from services.grading_service.constants import GRADE_DECIMALS
from services.grading_service.grading_logic.numeric_validation import require_non_negative

logger = create_service_logger("grading_service.gpa")


class GpaAggregator:
    """Aggregates per-course grade points into a GPA weighted by credits."""

    def __init__(self) -> None:
        self.logger = logger

    def _totals(self, grades: Sequence[CourseGradePoints], operation: str) -> tuple[float, float]:
        total_credits = 0.0
        total_grade_points = 0.0
        for index, entry in enumerate(grades):
            points = require_non_negative(
                entry.grade_points, f"grades[{index}].grade_points", operation
            )
            credits = require_non_negative(entry.credits, f"grades[{index}].credits", operation)
            total_credits += credits
            total_grade_points += points * credits
        return total_credits, total_grade_points

    def gpa(self, grades: Sequence[CourseGradePoints]) -> float:
        """Sum(points * credits) / Sum(credits) rounded to 2 decimals; 0.0 with no credits."""
        total_credits, total_grade_points = self._totals(grades, "gpa")
        if total_credits == 0:
            return 0.0
        return round(total_grade_points / total_credits, GRADE_DECIMALS)

    def summarize(self, grades: Sequence[CourseGradePoints]) -> GpaSummary:
        total_credits, total_grade_points = self._totals(grades, "summarize")
        gpa = round(total_grade_points / total_credits, GRADE_DECIMALS) if total_credits else 0.0

        self.logger.debug(
            "GPA aggregated",
            course_count=len(grades),
            total_credits=total_credits,
            gpa=gpa,
        )

        return GpaSummary(
            gpa=gpa,
            total_credits=total_credits,
            total_grade_points=round(total_grade_points, GRADE_DECIMALS),
            course_count=len(grades),
        )

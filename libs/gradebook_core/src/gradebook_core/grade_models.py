"""Grade calculation inputs and outputs.

GradedSubmission / GradedExamResult: Scored artifacts supplied by storage.
CategoryAverage: One category's average and declared weight.
GradeWeights: Category weights for a course grade calculation.
GradeRecord: The one current finalized grade for a (student, course) pair.
CourseGradePoints / GpaSummary: GPA inputs and output.
CourseGradeStatistics: Course-level summary of current grade records.
StudentGradeOutcome: Per-student entry of a batch calculation.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from .models.error_models import ErrorDetail
from .status_enums import GradeCalculationMethod

__all__ = [
    "CategoryAverage",
    "CourseGradePoints",
    "CourseGradeStatistics",
    "GpaSummary",
    "GradeRecord",
    "GradeWeights",
    "GradedExamResult",
    "GradedSubmission",
    "StudentGradeOutcome",
]


class GradedSubmission(BaseModel):
    """A graded assignment submission for one student in one course."""

    model_config = ConfigDict(frozen=True)

    assignment_id: str
    grade: float
    max_score: float


class GradedExamResult(BaseModel):
    """A graded exam attempt for one student in one course."""

    model_config = ConfigDict(frozen=True)

    exam_id: str
    score: float
    total_points: float


class CategoryAverage(BaseModel):
    """Average of one category with its weight as a percentage (0-100).

    average is None when the category has no graded entries; such a category
    is left out of the weighted average entirely.
    """

    model_config = ConfigDict(frozen=True)

    average: float | None
    weight: float


class GradeWeights(BaseModel):
    """Category weights (percentages) used for a weighted course grade."""

    model_config = ConfigDict(frozen=True)

    assignment_weight: float = Field(default=60.0, ge=0, le=100)
    exam_weight: float = Field(default=40.0, ge=0, le=100)
    participation_weight: float = Field(default=0.0, ge=0, le=100)
    participation_grade: float | None = Field(default=None, ge=0)


class GradeRecord(BaseModel):
    """Finalized grade for one student in one course.

    Recalculation replaces the record; there is never more than one current
    record per (student_id, course_id).
    """

    model_config = ConfigDict(frozen=True)

    student_id: str
    course_id: str
    final_grade: float = Field(ge=0, le=100)
    letter_grade: str
    grade_points: float
    calculation_method: GradeCalculationMethod
    assignment_grades: dict[str, float] = Field(default_factory=dict)
    exam_grades: dict[str, float] = Field(default_factory=dict)
    notes: str | None = None
    calculated_by: str
    calculated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CourseGradePoints(BaseModel):
    """Grade points earned in one course and the course's credit weight."""

    model_config = ConfigDict(frozen=True)

    grade_points: float
    credits: float
    course_id: str | None = None


class GpaSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    gpa: float
    total_credits: float
    total_grade_points: float
    course_count: int


class CourseGradeStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_students: int
    average_grade: float
    highest_grade: float
    lowest_grade: float
    grade_distribution: dict[str, int] = Field(default_factory=dict)


class StudentGradeOutcome(BaseModel):
    """Either the student's new GradeRecord or the error that prevented it."""

    model_config = ConfigDict(frozen=True)

    student_id: str
    record: GradeRecord | None = None
    error: ErrorDetail | None = None

    @property
    def succeeded(self) -> bool:
        return self.record is not None and self.error is None

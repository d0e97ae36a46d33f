from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Protocol

from gradebook_core.exam_models import Exam, ExamAnswer, ExamAttempt
from gradebook_core.grade_models import (
    CourseGradeStatistics,
    GpaSummary,
    GradedExamResult,
    GradedSubmission,
    GradeRecord,
    GradeWeights,
    StudentGradeOutcome,
)
from gradebook_core.status_enums import GradeCalculationMethod


class GradedWorkRepositoryProtocol(Protocol):
    """Protocol for reading graded artifacts scoped to a student and a course."""

    async def get_graded_submissions(
        self, student_id: str, course_id: str
    ) -> list[GradedSubmission]:
        """Return graded assignment submissions with grade and max score."""
        ...

    async def get_graded_exam_results(
        self, student_id: str, course_id: str
    ) -> list[GradedExamResult]:
        """Return scores of exam attempts in GRADED status with exam total points."""
        ...


class EnrollmentRepositoryProtocol(Protocol):
    async def get_enrolled_students(self, course_id: str) -> list[str]: ...


class GradeRecordRepositoryProtocol(Protocol):
    """Protocol for grade record persistence keyed by (student_id, course_id)."""

    async def persist_grade_record(self, record: GradeRecord) -> GradeRecord:
        """Upsert the record, replacing any current record for the pair."""
        ...

    async def get_grade_record(self, student_id: str, course_id: str) -> GradeRecord | None: ...

    async def list_grade_records_for_student(self, student_id: str) -> list[GradeRecord]: ...

    async def list_grade_records_for_course(self, course_id: str) -> list[GradeRecord]: ...


class CourseCatalogProtocol(Protocol):
    async def get_course_credits(self, course_id: str) -> float | None:
        """Return the course's credit hours, or None when credits are not tracked."""
        ...


class ExamRepositoryProtocol(Protocol):
    """Protocol for exam and exam attempt persistence."""

    async def save_exam(self, exam: Exam) -> Exam: ...

    async def get_exam(self, exam_id: str) -> Exam | None: ...

    async def set_first_attempt_timestamp(self, exam_id: str, timestamp: datetime) -> None:
        """Record the exam's first attempt time; later calls leave it unchanged."""
        ...

    async def count_attempts_for_exam(self, exam_id: str) -> int: ...

    async def find_attempt(self, exam_id: str, student_id: str) -> ExamAttempt | None: ...

    async def get_attempt(self, attempt_id: str) -> ExamAttempt | None: ...

    async def save_attempt(self, attempt: ExamAttempt) -> ExamAttempt:
        """Insert or replace the attempt by id."""
        ...

    async def list_attempts_for_exam(self, exam_id: str) -> list[ExamAttempt]: ...

    async def list_attempts_for_student(self, student_id: str) -> list[ExamAttempt]: ...


class ExamAttemptServiceProtocol(Protocol):
    """Protocol for the exam attempt lifecycle: start -> submit -> grade."""

    async def create_exam(self, exam: Exam) -> Exam: ...

    async def get_exam(self, exam_id: str, include_answer_key: bool = True) -> Exam: ...

    async def start(self, exam_id: str, student_id: str) -> ExamAttempt: ...

    async def submit(
        self, attempt_id: str, answers: Sequence[ExamAnswer | Mapping[str, Any]]
    ) -> ExamAttempt:
        """Accepts answer models or their dict form, validated against the tagged variants."""
        ...

    async def grade(
        self, attempt_id: str, manual_score: float, feedback: str | None = None
    ) -> ExamAttempt: ...

    async def get_attempt(self, attempt_id: str) -> ExamAttempt: ...

    async def list_attempts_for_exam(self, exam_id: str) -> list[ExamAttempt]: ...

    async def list_attempts_for_student(self, student_id: str) -> list[ExamAttempt]: ...


class GradeServiceProtocol(Protocol):
    """Protocol for course grade calculation and reporting."""

    async def calculate_grade(
        self,
        student_id: str,
        course_id: str,
        weights: GradeWeights,
        calculated_by: str | None = None,
        method: GradeCalculationMethod = GradeCalculationMethod.WEIGHTED_AVERAGE,
    ) -> GradeRecord: ...

    async def calculate_for_all_students_in_course(
        self, course_id: str, weights: GradeWeights, calculated_by: str | None = None
    ) -> list[StudentGradeOutcome]: ...

    async def record_manual_grade(
        self,
        student_id: str,
        course_id: str,
        final_grade: float,
        calculated_by: str,
        notes: str | None = None,
    ) -> GradeRecord: ...

    async def calculate_student_gpa(self, student_id: str) -> GpaSummary: ...

    async def get_course_statistics(self, course_id: str) -> CourseGradeStatistics: ...

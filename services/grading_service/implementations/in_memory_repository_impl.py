"""
In-memory implementation of every grading collaborator protocol.

Holds exams, attempts, enrollments, graded submissions, course credits and
grade records in dictionaries. Stored models are copied on the way in and on
the way out, so callers never share mutable state with the store.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime

from gradebook_core.exam_models import Exam, ExamAttempt
from gradebook_core.grade_models import GradedExamResult, GradedSubmission, GradeRecord
from gradebook_core.status_enums import ExamAttemptStatus
from gradebook_service_libs.logging_utils import create_service_logger

from services.grading_service.protocols import (
    CourseCatalogProtocol,
    EnrollmentRepositoryProtocol,
    ExamRepositoryProtocol,
    GradedWorkRepositoryProtocol,
    GradeRecordRepositoryProtocol,
)

logger = create_service_logger("grading_service.in_memory_repository")


class InMemoryGradebookRepository(
    GradedWorkRepositoryProtocol,
    EnrollmentRepositoryProtocol,
    GradeRecordRepositoryProtocol,
    CourseCatalogProtocol,
    ExamRepositoryProtocol,
):
    """Single-event-loop store for development and tests."""

    def __init__(self) -> None:
        self._exams: dict[str, Exam] = {}
        self._attempts: dict[str, ExamAttempt] = {}
        self._enrollments: dict[str, list[str]] = defaultdict(list)
        self._submissions: dict[tuple[str, str], list[GradedSubmission]] = defaultdict(list)
        self._course_credits: dict[str, float] = {}
        self._grade_records: dict[tuple[str, str], GradeRecord] = {}

    # Seeding helpers for data owned by other parts of the gradebook

    def enroll_student(self, course_id: str, student_id: str) -> None:
        if student_id not in self._enrollments[course_id]:
            self._enrollments[course_id].append(student_id)

    def add_graded_submission(
        self, student_id: str, course_id: str, submission: GradedSubmission
    ) -> None:
        self._submissions[(student_id, course_id)].append(submission)

    def set_course_credits(self, course_id: str, credits: float) -> None:
        self._course_credits[course_id] = credits

    # GradedWorkRepositoryProtocol

    async def get_graded_submissions(
        self, student_id: str, course_id: str
    ) -> list[GradedSubmission]:
        return list(self._submissions.get((student_id, course_id), []))

    async def get_graded_exam_results(
        self, student_id: str, course_id: str
    ) -> list[GradedExamResult]:
        results = []
        for attempt in self._attempts.values():
            if attempt.student_id != student_id or attempt.status is not ExamAttemptStatus.GRADED:
                continue
            exam = self._exams.get(attempt.exam_id)
            if exam is None or exam.course_id != course_id:
                continue
            results.append(
                GradedExamResult(
                    exam_id=exam.id, score=attempt.score, total_points=exam.total_points
                )
            )
        return results

    # EnrollmentRepositoryProtocol

    async def get_enrolled_students(self, course_id: str) -> list[str]:
        return list(self._enrollments.get(course_id, []))

    # GradeRecordRepositoryProtocol

    async def persist_grade_record(self, record: GradeRecord) -> GradeRecord:
        key = (record.student_id, record.course_id)
        if key in self._grade_records:
            logger.debug(
                "Replacing grade record",
                student_id=record.student_id,
                course_id=record.course_id,
            )
        self._grade_records[key] = record
        return record

    async def get_grade_record(self, student_id: str, course_id: str) -> GradeRecord | None:
        return self._grade_records.get((student_id, course_id))

    async def list_grade_records_for_student(self, student_id: str) -> list[GradeRecord]:
        return [r for r in self._grade_records.values() if r.student_id == student_id]

    async def list_grade_records_for_course(self, course_id: str) -> list[GradeRecord]:
        return [r for r in self._grade_records.values() if r.course_id == course_id]

    # CourseCatalogProtocol

    async def get_course_credits(self, course_id: str) -> float | None:
        return self._course_credits.get(course_id)

    # ExamRepositoryProtocol

    async def save_exam(self, exam: Exam) -> Exam:
        self._exams[exam.id] = exam.model_copy(deep=True)
        return exam.model_copy(deep=True)

    async def get_exam(self, exam_id: str) -> Exam | None:
        exam = self._exams.get(exam_id)
        return exam.model_copy(deep=True) if exam is not None else None

    async def set_first_attempt_timestamp(self, exam_id: str, timestamp: datetime) -> None:
        exam = self._exams.get(exam_id)
        if exam is None or exam.first_attempt_timestamp is not None:
            return
        self._exams[exam_id] = exam.model_copy(update={"first_attempt_timestamp": timestamp})

    async def count_attempts_for_exam(self, exam_id: str) -> int:
        return sum(1 for attempt in self._attempts.values() if attempt.exam_id == exam_id)

    async def find_attempt(self, exam_id: str, student_id: str) -> ExamAttempt | None:
        for attempt in self._attempts.values():
            if attempt.exam_id == exam_id and attempt.student_id == student_id:
                return attempt.model_copy(deep=True)
        return None

    async def get_attempt(self, attempt_id: str) -> ExamAttempt | None:
        attempt = self._attempts.get(attempt_id)
        return attempt.model_copy(deep=True) if attempt is not None else None

    async def save_attempt(self, attempt: ExamAttempt) -> ExamAttempt:
        self._attempts[attempt.id] = attempt.model_copy(deep=True)
        return attempt

    async def list_attempts_for_exam(self, exam_id: str) -> list[ExamAttempt]:
        return [
            attempt.model_copy(deep=True)
            for attempt in self._attempts.values()
            if attempt.exam_id == exam_id
        ]

    async def list_attempts_for_student(self, student_id: str) -> list[ExamAttempt]:
        return [
            attempt.model_copy(deep=True)
            for attempt in self._attempts.values()
            if attempt.student_id == student_id
        ]

"""
Course grade orchestration.

Gathers a student's graded work, averages it into a course percentage,
converts the percentage to a letter and grade points and upserts the
GradeRecord. Also covers course-wide batches, manual grades, GPA and course
statistics.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar
from uuid import uuid4

from gradebook_core.domain_enums import GradeCategory
from gradebook_core.error_enums import ErrorCode
from gradebook_core.grade_models import (
    CategoryAverage,
    CourseGradePoints,
    CourseGradeStatistics,
    GpaSummary,
    GradedExamResult,
    GradedSubmission,
    GradeRecord,
    GradeWeights,
    StudentGradeOutcome,
)
from gradebook_core.grade_scales import MAX_PERCENT, MIN_PERCENT
from gradebook_core.models.error_models import ErrorDetail
from gradebook_core.status_enums import GradeCalculationMethod
from gradebook_service_libs import Result
from gradebook_service_libs.error_handling import (
    GradebookError,
    create_error_detail_with_context,
    raise_dependency_unavailable,
    raise_invalid_input,
)
from gradebook_service_libs.logging_utils import bind_operation_context, create_service_logger

from services.grading_service.config import Settings
from services.grading_service.constants import (
    AUTO_CALCULATION_NOTE,
    GRADE_DECIMALS,
    SERVICE_NAME,
)
from services.grading_service.grading_logic.gpa import GpaAggregator
from services.grading_service.grading_logic.grade_statistics import summarize_course_grades
from services.grading_service.grading_logic.letter_grades import LetterGradeConverter
from services.grading_service.grading_logic.numeric_validation import require_non_negative
from services.grading_service.grading_logic.weighted_average import WeightedGradeCalculator
from services.grading_service.metrics import GradingMetrics
from services.grading_service.protocols import (
    CourseCatalogProtocol,
    EnrollmentRepositoryProtocol,
    GradedWorkRepositoryProtocol,
    GradeRecordRepositoryProtocol,
    GradeServiceProtocol,
)

logger = create_service_logger("grading_service.grade_service")

T = TypeVar("T")


def _clamp_and_round(percent: float) -> float:
    return round(min(max(percent, MIN_PERCENT), MAX_PERCENT), GRADE_DECIMALS)


class GradeServiceImpl(GradeServiceProtocol):
    """Implementation of GradeServiceProtocol over injected collaborators."""

    def __init__(
        self,
        graded_work: GradedWorkRepositoryProtocol,
        enrollment: EnrollmentRepositoryProtocol,
        grade_records: GradeRecordRepositoryProtocol,
        course_catalog: CourseCatalogProtocol,
        converter: LetterGradeConverter,
        calculator: WeightedGradeCalculator,
        gpa_aggregator: GpaAggregator,
        settings: Settings,
        metrics: GradingMetrics,
    ) -> None:
        self.graded_work = graded_work
        self.enrollment = enrollment
        self.grade_records = grade_records
        self.course_catalog = course_catalog
        self.converter = converter
        self.calculator = calculator
        self.gpa_aggregator = gpa_aggregator
        self.settings = settings
        self.metrics = metrics

    async def _call_dependency(
        self, call: Callable[[], Awaitable[T]], dependency: str, operation: str
    ) -> T:
        """Invoke and await a collaborator call, reporting any failure as DEPENDENCY_UNAVAILABLE."""
        try:
            return await call()
        except GradebookError:
            raise
        except Exception as exc:
            logger.error(
                "Collaborator call failed",
                dependency=dependency,
                operation=operation,
                error=str(exc),
                exc_info=True,
            )
            raise_dependency_unavailable(
                service=SERVICE_NAME,
                operation=operation,
                dependency=dependency,
                message=f"{dependency} failed during {operation}: {exc}",
                error_type=type(exc).__name__,
            )

    def _submission_percentages(
        self, submissions: list[GradedSubmission], student_id: str
    ) -> dict[str, float]:
        percentages: dict[str, float] = {}
        for submission in submissions:
            grade = require_non_negative(
                submission.grade, f"submission[{submission.assignment_id}].grade", "calculate_grade"
            )
            if submission.max_score <= 0:
                logger.warning(
                    "Skipping submission without a positive max score",
                    student_id=student_id,
                    assignment_id=submission.assignment_id,
                    max_score=submission.max_score,
                )
                continue
            percentages[submission.assignment_id] = grade / submission.max_score * 100
        return percentages

    def _exam_percentages(
        self, exam_results: list[GradedExamResult], student_id: str
    ) -> dict[str, float]:
        percentages: dict[str, float] = {}
        for result in exam_results:
            score = require_non_negative(
                result.score, f"exam[{result.exam_id}].score", "calculate_grade"
            )
            if result.total_points <= 0:
                logger.warning(
                    "Skipping exam without positive total points",
                    student_id=student_id,
                    exam_id=result.exam_id,
                    total_points=result.total_points,
                )
                continue
            percentages[result.exam_id] = score / result.total_points * 100
        return percentages

    def _course_percent(
        self,
        method: GradeCalculationMethod,
        weights: GradeWeights,
        assignment_percentages: dict[str, float],
        exam_percentages: dict[str, float],
    ) -> float:
        if method is GradeCalculationMethod.SIMPLE_AVERAGE:
            scores = [*assignment_percentages.values(), *exam_percentages.values()]
            if weights.participation_grade is not None:
                scores.append(weights.participation_grade)
            return self.calculator.simple_average(scores)

        categories: dict[GradeCategory, CategoryAverage] = {
            GradeCategory.ASSIGNMENTS: CategoryAverage(
                average=self.calculator.category_average(list(assignment_percentages.values())),
                weight=weights.assignment_weight,
            ),
            GradeCategory.EXAMS: CategoryAverage(
                average=self.calculator.category_average(list(exam_percentages.values())),
                weight=weights.exam_weight,
            ),
        }
        # Participation only counts once a grade has been given
        if weights.participation_grade is not None:
            categories[GradeCategory.PARTICIPATION] = CategoryAverage(
                average=weights.participation_grade, weight=weights.participation_weight
            )
        logger.debug(
            "Category averages",
            categories={
                category.value: entry.average for category, entry in categories.items()
            },
        )
        return self.calculator.weighted_average(list(categories.values()))

    async def calculate_grade(
        self,
        student_id: str,
        course_id: str,
        weights: GradeWeights,
        calculated_by: str | None = None,
        method: GradeCalculationMethod = GradeCalculationMethod.WEIGHTED_AVERAGE,
    ) -> GradeRecord:
        """
        Calculate and store a student's course grade from their graded work.

        Args:
            student_id: Student whose grade is calculated
            course_id: Course the graded work belongs to
            weights: Category weights and optional participation grade
            calculated_by: Recorded author; the configured system id when omitted
            method: WEIGHTED_AVERAGE or SIMPLE_AVERAGE

        Returns:
            The persisted GradeRecord, replacing any previous one for the pair
        """
        try:
            if method is GradeCalculationMethod.MANUAL:
                raise_invalid_input(
                    service=SERVICE_NAME,
                    operation="calculate_grade",
                    field="method",
                    message="Manual grades are recorded with record_manual_grade",
                    value=method.value,
                )

            submissions = await self._call_dependency(
                lambda: self.graded_work.get_graded_submissions(student_id, course_id),
                "graded_work",
                "calculate_grade",
            )
            exam_results = await self._call_dependency(
                lambda: self.graded_work.get_graded_exam_results(student_id, course_id),
                "graded_work",
                "calculate_grade",
            )

            assignment_percentages = self._submission_percentages(submissions, student_id)
            exam_percentages = self._exam_percentages(exam_results, student_id)

            raw_percent = self._course_percent(
                method, weights, assignment_percentages, exam_percentages
            )
            final_grade = _clamp_and_round(raw_percent)
            letter_grade, grade_points = self.converter.convert(final_grade)

            record = GradeRecord(
                student_id=student_id,
                course_id=course_id,
                final_grade=final_grade,
                letter_grade=letter_grade,
                grade_points=grade_points,
                calculation_method=method,
                assignment_grades={
                    key: round(value, GRADE_DECIMALS)
                    for key, value in assignment_percentages.items()
                },
                exam_grades={
                    key: round(value, GRADE_DECIMALS) for key, value in exam_percentages.items()
                },
                notes=AUTO_CALCULATION_NOTE,
                calculated_by=calculated_by or self.settings.SYSTEM_CALCULATOR_ID,
            )

            saved = await self._call_dependency(
                lambda: self.grade_records.persist_grade_record(record),
                "grade_records",
                "calculate_grade",
            )
        except GradebookError:
            self.metrics.record_grade_calculation(method.value, "error")
            raise

        self.metrics.record_grade_calculation(method.value, "success")
        logger.info(
            "Course grade calculated",
            student_id=student_id,
            course_id=course_id,
            method=method.value,
            final_grade=saved.final_grade,
            letter_grade=saved.letter_grade,
            assignment_count=len(assignment_percentages),
            exam_count=len(exam_percentages),
        )
        return saved

    async def calculate_for_all_students_in_course(
        self, course_id: str, weights: GradeWeights, calculated_by: str | None = None
    ) -> list[StudentGradeOutcome]:
        """
        Calculate grades for every enrolled student, isolating failures per student.

        Returns:
            One outcome per enrolled student in enrollment order, holding either
            the new GradeRecord or the ErrorDetail that prevented it
        """
        student_ids = await self._call_dependency(
            lambda: self.enrollment.get_enrolled_students(course_id),
            "enrollment",
            "calculate_for_all_students_in_course",
        )
        if not student_ids:
            logger.warning("No enrolled students for course", course_id=course_id)
            return []

        semaphore = asyncio.Semaphore(self.settings.BATCH_MAX_CONCURRENCY)

        async def calculate_one(student_id: str) -> Result[GradeRecord, ErrorDetail]:
            async with semaphore:
                correlation_id = uuid4()
                bind_operation_context(
                    correlation_id,
                    "calculate_grade",
                    student_id=student_id,
                    course_id=course_id,
                )
                try:
                    record = await self.calculate_grade(
                        student_id, course_id, weights, calculated_by=calculated_by
                    )
                    return Result.ok(record)
                except GradebookError as error:
                    logger.warning(
                        "Grade calculation failed for student",
                        error_code=error.error_code,
                        error=error.error_detail.message,
                    )
                    return Result.err(error.error_detail)
                except Exception as exc:
                    logger.error(
                        "Unexpected error calculating grade for student",
                        error=str(exc),
                        exc_info=True,
                    )
                    return Result.err(
                        create_error_detail_with_context(
                            error_code=ErrorCode.PROCESSING_ERROR,
                            message=f"Unexpected error calculating grade: {exc}",
                            service=SERVICE_NAME,
                            operation="calculate_grade",
                            correlation_id=correlation_id,
                            details={
                                "student_id": student_id,
                                "course_id": course_id,
                                "error_type": type(exc).__name__,
                            },
                            capture_stack=True,
                        )
                    )

        with self.metrics.batch_calculation_duration.time():
            results = await asyncio.gather(*(calculate_one(sid) for sid in student_ids))

        outcomes: list[StudentGradeOutcome] = []
        for student_id, result in zip(student_ids, results):
            if result.is_ok:
                outcomes.append(StudentGradeOutcome(student_id=student_id, record=result.value))
            else:
                self.metrics.batch_student_failures_total.labels(
                    error_code=result.error.error_code.value
                ).inc()
                outcomes.append(StudentGradeOutcome(student_id=student_id, error=result.error))

        failed = sum(1 for outcome in outcomes if not outcome.succeeded)
        logger.info(
            "Course grade batch completed",
            course_id=course_id,
            total_students=len(outcomes),
            succeeded=len(outcomes) - failed,
            failed=failed,
        )
        return outcomes

    async def record_manual_grade(
        self,
        student_id: str,
        course_id: str,
        final_grade: float,
        calculated_by: str,
        notes: str | None = None,
    ) -> GradeRecord:
        """Store a teacher-entered course percentage, deriving letter and points."""
        method = GradeCalculationMethod.MANUAL
        try:
            value = require_non_negative(final_grade, "final_grade", "record_manual_grade")
            if value > MAX_PERCENT:
                raise_invalid_input(
                    service=SERVICE_NAME,
                    operation="record_manual_grade",
                    field="final_grade",
                    message="final_grade cannot exceed 100",
                    value=value,
                )
            if not calculated_by:
                raise_invalid_input(
                    service=SERVICE_NAME,
                    operation="record_manual_grade",
                    field="calculated_by",
                    message="Manual grades need the id of the person entering them",
                )

            rounded = round(value, GRADE_DECIMALS)
            letter_grade, grade_points = self.converter.convert(rounded)

            previous = await self._call_dependency(
                lambda: self.grade_records.get_grade_record(student_id, course_id),
                "grade_records",
                "record_manual_grade",
            )
            record = GradeRecord(
                student_id=student_id,
                course_id=course_id,
                final_grade=rounded,
                letter_grade=letter_grade,
                grade_points=grade_points,
                calculation_method=method,
                assignment_grades=dict(previous.assignment_grades) if previous else {},
                exam_grades=dict(previous.exam_grades) if previous else {},
                notes=notes,
                calculated_by=calculated_by,
            )
            saved = await self._call_dependency(
                lambda: self.grade_records.persist_grade_record(record),
                "grade_records",
                "record_manual_grade",
            )
        except GradebookError:
            self.metrics.record_grade_calculation(method.value, "error")
            raise

        self.metrics.record_grade_calculation(method.value, "success")
        logger.info(
            "Manual course grade recorded",
            student_id=student_id,
            course_id=course_id,
            final_grade=saved.final_grade,
            letter_grade=saved.letter_grade,
            calculated_by=calculated_by,
        )
        return saved

    async def calculate_student_gpa(self, student_id: str) -> GpaSummary:
        records = await self._call_dependency(
            lambda: self.grade_records.list_grade_records_for_student(student_id),
            "grade_records",
            "calculate_student_gpa",
        )

        course_points: list[CourseGradePoints] = []
        for record in records:
            credits = await self._call_dependency(
                lambda: self.course_catalog.get_course_credits(record.course_id),
                "course_catalog",
                "calculate_student_gpa",
            )
            if credits is None:
                credits = self.settings.DEFAULT_COURSE_CREDITS
            course_points.append(
                CourseGradePoints(
                    course_id=record.course_id,
                    grade_points=record.grade_points,
                    credits=credits,
                )
            )

        summary = self.gpa_aggregator.summarize(course_points)
        logger.info(
            "Student GPA calculated",
            student_id=student_id,
            gpa=summary.gpa,
            course_count=summary.course_count,
        )
        return summary

    async def get_course_statistics(self, course_id: str) -> CourseGradeStatistics:
        records = await self._call_dependency(
            lambda: self.grade_records.list_grade_records_for_course(course_id),
            "grade_records",
            "get_course_statistics",
        )
        return summarize_course_grades(records, self.converter.scale.letters)

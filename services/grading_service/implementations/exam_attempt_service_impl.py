"""Exam attempt lifecycle: start, submit with auto-scoring, manual grading."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from gradebook_core.exam_models import Exam, ExamAnswer, ExamAttempt
from gradebook_service_libs.error_handling import (
    raise_duplicate_attempt,
    raise_invalid_input,
    raise_resource_not_found,
    raise_score_out_of_range,
)
from gradebook_service_libs.logging_utils import create_service_logger

from services.grading_service.constants import SERVICE_NAME
from services.grading_service.exam_attempt_state_machine import (
    FINALIZE_AUTO_GRADED,
    RECORD_MANUAL_SCORE,
    SUBMIT_ANSWERS,
    ExamAttemptStateMachine,
)
from services.grading_service.grading_logic.exam_scoring import (
    parse_answers,
    score_objective_answers,
    validate_answers,
)
from services.grading_service.metrics import GradingMetrics
from services.grading_service.protocols import (
    ExamAttemptServiceProtocol,
    ExamRepositoryProtocol,
)

logger = create_service_logger("grading_service.exam_attempts")


class ExamAttemptServiceImpl(ExamAttemptServiceProtocol):
    """Drives attempts through ExamAttemptStateMachine and persists each step.

    Every validation happens on a copy of the stored attempt; the copy is saved
    only after all checks and the state transition succeed.
    """

    def __init__(self, repository: ExamRepositoryProtocol, metrics: GradingMetrics) -> None:
        self.repository = repository
        self.metrics = metrics

    async def create_exam(self, exam: Exam) -> Exam:
        saved = await self.repository.save_exam(exam)
        logger.info(
            "Exam created",
            exam_id=saved.id,
            course_id=saved.course_id,
            question_count=len(saved.questions),
            total_points=saved.total_points,
        )
        return saved

    async def get_exam(self, exam_id: str, include_answer_key: bool = True) -> Exam:
        exam = await self._require_exam(exam_id, "get_exam")
        return exam if include_answer_key else exam.student_view()

    async def start(self, exam_id: str, student_id: str) -> ExamAttempt:
        await self._require_exam(exam_id, "start")

        existing = await self.repository.find_attempt(exam_id, student_id)
        if existing is not None:
            raise_duplicate_attempt(
                service=SERVICE_NAME,
                operation="start",
                exam_id=exam_id,
                student_id=student_id,
                existing_attempt_id=existing.id,
                existing_status=existing.status.value,
            )

        attempt = ExamAttempt(exam_id=exam_id, student_id=student_id)
        if await self.repository.count_attempts_for_exam(exam_id) == 0:
            await self.repository.set_first_attempt_timestamp(exam_id, attempt.started_at)
            logger.info("First attempt for exam", exam_id=exam_id, started_at=attempt.started_at)

        saved = await self.repository.save_attempt(attempt)
        self.metrics.exam_attempts_started_total.inc()
        logger.info(
            "Exam attempt started", attempt_id=saved.id, exam_id=exam_id, student_id=student_id
        )
        return saved

    async def submit(
        self, attempt_id: str, answers: Sequence[ExamAnswer | Mapping[str, Any]]
    ) -> ExamAttempt:
        attempt = await self._require_attempt(attempt_id, "submit")
        exam = await self._require_exam(attempt.exam_id, "submit")

        machine = ExamAttemptStateMachine(attempt.id, attempt.status)
        machine.require_trigger(SUBMIT_ANSWERS, "submit")

        parsed = parse_answers(answers, attempt.id)
        keyed_answers = validate_answers(exam, parsed, attempt.id)
        auto_score = score_objective_answers(exam, keyed_answers)

        status = machine.fire(SUBMIT_ANSWERS, "submit")
        self.metrics.record_transition(SUBMIT_ANSWERS, status.value)

        updated = attempt.model_copy(
            update={
                "answers": keyed_answers,
                "auto_score": auto_score,
                "total_auto_points": exam.total_auto_points,
                "score": float(auto_score),
                "submitted_at": datetime.now(UTC),
                "status": status,
            }
        )

        if not exam.has_manual_questions:
            status = machine.fire(FINALIZE_AUTO_GRADED, "submit")
            self.metrics.record_transition(FINALIZE_AUTO_GRADED, status.value)
            updated = updated.model_copy(
                update={"status": status, "is_graded": True, "graded_at": updated.submitted_at}
            )

        saved = await self.repository.save_attempt(updated)
        logger.info(
            "Exam attempt submitted",
            attempt_id=saved.id,
            exam_id=saved.exam_id,
            auto_score=saved.auto_score,
            total_auto_points=saved.total_auto_points,
            status=saved.status.value,
        )
        return saved

    async def grade(
        self, attempt_id: str, manual_score: float, feedback: str | None = None
    ) -> ExamAttempt:
        attempt = await self._require_attempt(attempt_id, "grade")
        exam = await self._require_exam(attempt.exam_id, "grade")

        machine = ExamAttemptStateMachine(attempt.id, attempt.status)
        machine.require_trigger(RECORD_MANUAL_SCORE, "grade")

        if isinstance(manual_score, bool) or not isinstance(manual_score, (int, float)):
            raise_invalid_input(
                service=SERVICE_NAME,
                operation="grade",
                field="manual_score",
                message="manual_score must be a number",
                value=repr(manual_score),
                attempt_id=attempt_id,
            )
        if math.isnan(manual_score) or math.isinf(manual_score):
            raise_invalid_input(
                service=SERVICE_NAME,
                operation="grade",
                field="manual_score",
                message="manual_score must be a finite number",
                attempt_id=attempt_id,
            )
        if manual_score < 0:
            raise_score_out_of_range(
                service=SERVICE_NAME,
                operation="grade",
                attempt_id=attempt_id,
                score=manual_score,
                max_score=exam.total_points,
                message=f"Manual score {manual_score} cannot be negative",
            )
        total = attempt.auto_score + manual_score
        if total > exam.total_points:
            raise_score_out_of_range(
                service=SERVICE_NAME,
                operation="grade",
                attempt_id=attempt_id,
                score=total,
                max_score=exam.total_points,
                message=(
                    f"Auto score {attempt.auto_score} plus manual score {manual_score} "
                    f"exceeds exam total {exam.total_points}"
                ),
                auto_score=attempt.auto_score,
                manual_score=manual_score,
            )

        status = machine.fire(RECORD_MANUAL_SCORE, "grade")
        self.metrics.record_transition(RECORD_MANUAL_SCORE, status.value)

        updated = attempt.model_copy(
            update={
                "manual_score": float(manual_score),
                "score": float(total),
                "feedback": feedback,
                "is_graded": True,
                "graded_at": datetime.now(UTC),
                "status": status,
            }
        )
        saved = await self.repository.save_attempt(updated)
        logger.info(
            "Exam attempt graded",
            attempt_id=saved.id,
            exam_id=saved.exam_id,
            auto_score=saved.auto_score,
            manual_score=saved.manual_score,
            score=saved.score,
        )
        return saved

    async def get_attempt(self, attempt_id: str) -> ExamAttempt:
        return await self._require_attempt(attempt_id, "get_attempt")

    async def list_attempts_for_exam(self, exam_id: str) -> list[ExamAttempt]:
        return await self.repository.list_attempts_for_exam(exam_id)

    async def list_attempts_for_student(self, student_id: str) -> list[ExamAttempt]:
        return await self.repository.list_attempts_for_student(student_id)

    async def _require_exam(self, exam_id: str, operation: str) -> Exam:
        exam = await self.repository.get_exam(exam_id)
        if exam is None:
            raise_resource_not_found(
                service=SERVICE_NAME,
                operation=operation,
                resource_type="Exam",
                resource_id=exam_id,
            )
        return exam

    async def _require_attempt(self, attempt_id: str, operation: str) -> ExamAttempt:
        attempt = await self.repository.get_attempt(attempt_id)
        if attempt is None:
            raise_resource_not_found(
                service=SERVICE_NAME,
                operation=operation,
                resource_type="ExamAttempt",
                resource_id=attempt_id,
            )
        return attempt

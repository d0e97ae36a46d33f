"""Unit tests for ExamAttemptStateMachine transitions."""

from __future__ import annotations

import pytest
from gradebook_core.error_enums import GradingErrorCode
from gradebook_core.status_enums import ExamAttemptStatus
from gradebook_service_libs.error_handling import GradebookError

from services.grading_service.exam_attempt_state_machine import (
    FINALIZE_AUTO_GRADED,
    RECORD_MANUAL_SCORE,
    SUBMIT_ANSWERS,
    ExamAttemptStateMachine,
)


class TestValidTransitions:
    def test_submit_moves_in_progress_to_submitted(self) -> None:
        machine = ExamAttemptStateMachine("attempt-1", ExamAttemptStatus.IN_PROGRESS)

        assert machine.fire(SUBMIT_ANSWERS, "submit") is ExamAttemptStatus.SUBMITTED
        assert machine.current_status is ExamAttemptStatus.SUBMITTED

    @pytest.mark.parametrize("trigger", [RECORD_MANUAL_SCORE, FINALIZE_AUTO_GRADED])
    def test_submitted_reaches_graded(self, trigger: str) -> None:
        machine = ExamAttemptStateMachine("attempt-1", ExamAttemptStatus.SUBMITTED)

        assert machine.fire(trigger, "grade") is ExamAttemptStatus.GRADED

    @pytest.mark.parametrize(
        "status, expected",
        [
            (ExamAttemptStatus.IN_PROGRESS, [SUBMIT_ANSWERS]),
            (ExamAttemptStatus.SUBMITTED, [RECORD_MANUAL_SCORE, FINALIZE_AUTO_GRADED]),
            (ExamAttemptStatus.GRADED, []),
        ],
    )
    def test_valid_triggers_per_status(
        self, status: ExamAttemptStatus, expected: list[str]
    ) -> None:
        assert ExamAttemptStateMachine("attempt-1", status).get_valid_triggers() == expected

    def test_only_graded_is_terminal(self) -> None:
        assert ExamAttemptStateMachine("a", ExamAttemptStatus.GRADED).is_terminal
        assert not ExamAttemptStateMachine("a", ExamAttemptStatus.SUBMITTED).is_terminal


class TestInvalidTransitions:
    @pytest.mark.parametrize(
        "status, trigger",
        [
            (ExamAttemptStatus.IN_PROGRESS, RECORD_MANUAL_SCORE),
            (ExamAttemptStatus.IN_PROGRESS, FINALIZE_AUTO_GRADED),
            (ExamAttemptStatus.SUBMITTED, SUBMIT_ANSWERS),
            (ExamAttemptStatus.GRADED, SUBMIT_ANSWERS),
            (ExamAttemptStatus.GRADED, RECORD_MANUAL_SCORE),
            (ExamAttemptStatus.GRADED, FINALIZE_AUTO_GRADED),
        ],
    )
    def test_disallowed_trigger_raises_and_keeps_status(
        self, status: ExamAttemptStatus, trigger: str
    ) -> None:
        machine = ExamAttemptStateMachine("attempt-1", status)

        with pytest.raises(GradebookError) as exc_info:
            machine.fire(trigger, "test_operation")

        detail = exc_info.value.error_detail
        assert detail.error_code == GradingErrorCode.INVALID_STATE_TRANSITION
        assert detail.operation == "test_operation"
        assert detail.details["current_status"] == status.value
        assert detail.details["trigger"] == trigger
        assert machine.current_status is status

    @pytest.mark.parametrize(
        "status, trigger, allowed",
        [
            (ExamAttemptStatus.IN_PROGRESS, RECORD_MANUAL_SCORE, [SUBMIT_ANSWERS]),
            (
                ExamAttemptStatus.SUBMITTED,
                SUBMIT_ANSWERS,
                [RECORD_MANUAL_SCORE, FINALIZE_AUTO_GRADED],
            ),
            (ExamAttemptStatus.GRADED, RECORD_MANUAL_SCORE, []),
        ],
    )
    def test_rejection_lists_triggers_allowed_now(
        self, status: ExamAttemptStatus, trigger: str, allowed: list[str]
    ) -> None:
        machine = ExamAttemptStateMachine("attempt-1", status)

        with pytest.raises(GradebookError) as exc_info:
            machine.require_trigger(trigger, "test_operation")

        assert exc_info.value.error_detail.details["valid_triggers"] == allowed

    def test_unknown_trigger_is_not_allowed(self) -> None:
        machine = ExamAttemptStateMachine("attempt-1", ExamAttemptStatus.IN_PROGRESS)

        assert machine.can_trigger("REOPEN") is False
        with pytest.raises(GradebookError):
            machine.require_trigger("REOPEN", "reopen")

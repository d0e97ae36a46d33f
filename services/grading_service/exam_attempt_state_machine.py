"""
ExamAttemptStateMachine - Formal lifecycle of one exam attempt.

Uses the transitions library to drive an attempt from in_progress through
submitted to graded. graded is terminal; every trigger that the current
state does not allow raises INVALID_STATE_TRANSITION instead of being ignored.
"""

from __future__ import annotations

from gradebook_core.status_enums import ExamAttemptStatus
from gradebook_service_libs.error_handling import raise_invalid_state_transition
from transitions import Machine

from services.grading_service.constants import SERVICE_NAME

# Student hands in answers
SUBMIT_ANSWERS = "SUBMIT_ANSWERS"
# Teacher records a manual score for short answer questions
RECORD_MANUAL_SCORE = "RECORD_MANUAL_SCORE"
# Submission without short answer questions needs no human grading
FINALIZE_AUTO_GRADED = "FINALIZE_AUTO_GRADED"

ALL_TRIGGERS = (SUBMIT_ANSWERS, RECORD_MANUAL_SCORE, FINALIZE_AUTO_GRADED)


class ExamAttemptStateMachine:
    """
    State machine for a single exam attempt.

    The machine only tracks status; scores and timestamps are owned by the
    exam attempt service that drives it.
    """

    def __init__(self, attempt_id: str, initial_status: ExamAttemptStatus):
        self.attempt_id = attempt_id

        states = [status.value for status in ExamAttemptStatus]

        transitions = [
            {
                "trigger": SUBMIT_ANSWERS,
                "source": ExamAttemptStatus.IN_PROGRESS.value,
                "dest": ExamAttemptStatus.SUBMITTED.value,
            },
            {
                "trigger": RECORD_MANUAL_SCORE,
                "source": ExamAttemptStatus.SUBMITTED.value,
                "dest": ExamAttemptStatus.GRADED.value,
            },
            {
                "trigger": FINALIZE_AUTO_GRADED,
                "source": ExamAttemptStatus.SUBMITTED.value,
                "dest": ExamAttemptStatus.GRADED.value,
            },
        ]

        self.machine = Machine(
            model=self,
            states=states,
            transitions=transitions,
            initial=initial_status.value,
            ignore_invalid_triggers=False,
            auto_transitions=False,
        )

    @property
    def current_status(self) -> ExamAttemptStatus:
        return ExamAttemptStatus(self.state)

    def can_trigger(self, trigger_name: str) -> bool:
        """True if the trigger is allowed from the current state."""
        may_method = getattr(self, f"may_{trigger_name}", None)
        if may_method is None or not callable(may_method):
            return False
        return bool(may_method())

    def fire(self, trigger_name: str, operation: str) -> ExamAttemptStatus:
        """
        Fire a trigger and return the new status.

        Args:
            trigger_name: One of the module's trigger constants
            operation: Service operation name reported on failure

        Raises:
            GradebookError: INVALID_STATE_TRANSITION when the trigger is not
                allowed from the current state
        """
        self.require_trigger(trigger_name, operation)
        getattr(self, trigger_name)()
        return self.current_status

    def require_trigger(self, trigger_name: str, operation: str) -> None:
        """Raise INVALID_STATE_TRANSITION unless the trigger is allowed now."""
        if not self.can_trigger(trigger_name):
            raise_invalid_state_transition(
                service=SERVICE_NAME,
                operation=operation,
                attempt_id=self.attempt_id,
                current_status=self.current_status.value,
                trigger=trigger_name,
                valid_triggers=self.get_valid_triggers(),
            )

    @property
    def is_terminal(self) -> bool:
        return self.current_status in ExamAttemptStatus.terminal()

    def get_valid_triggers(self) -> list[str]:
        if self.is_terminal:
            return []
        return [name for name in ALL_TRIGGERS if self.can_trigger(name)]

    def __str__(self) -> str:
        return (
            f"ExamAttemptStateMachine(attempt_id={self.attempt_id}, "
            f"status={self.current_status.value})"
        )

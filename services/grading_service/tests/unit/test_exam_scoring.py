"""Unit tests for answer validation and objective auto-scoring."""

from __future__ import annotations

import pytest
from gradebook_core.error_enums import GradingErrorCode
from gradebook_core.exam_models import (
    Exam,
    MultipleChoiceAnswer,
    ShortAnswerResponse,
    TrueFalseAnswer,
)
from gradebook_service_libs.error_handling import GradebookError

from services.grading_service.grading_logic.exam_scoring import (
    score_objective_answers,
    validate_answers,
)


class TestValidateAnswers:
    def test_keys_answers_by_question_id(self, mixed_exam: Exam) -> None:
        answers = [
            TrueFalseAnswer(question_id="q2", value=False),
            MultipleChoiceAnswer(question_id="q1", selected_index=0),
        ]

        keyed = validate_answers(mixed_exam, answers, "attempt-1")

        assert set(keyed) == {"q1", "q2"}
        assert keyed["q2"].response is False

    @pytest.mark.parametrize(
        "answers, expected_question",
        [
            ([MultipleChoiceAnswer(question_id="missing", selected_index=0)], "missing"),
            ([TrueFalseAnswer(question_id="q1", value=True)], "q1"),
            ([ShortAnswerResponse(question_id="q2", text="yes")], "q2"),
            ([MultipleChoiceAnswer(question_id="q1", selected_index=3)], "q1"),
            ([MultipleChoiceAnswer(question_id="q1", selected_index=-1)], "q1"),
            (
                [
                    TrueFalseAnswer(question_id="q2", value=True),
                    TrueFalseAnswer(question_id="q2", value=False),
                ],
                "q2",
            ),
        ],
        ids=["unknown", "kind-mismatch", "short-for-tf", "index-high", "index-low", "duplicate"],
    )
    def test_malformed_answers_raise_invalid_input(
        self, mixed_exam: Exam, answers: list, expected_question: str
    ) -> None:
        with pytest.raises(GradebookError) as exc_info:
            validate_answers(mixed_exam, answers, "attempt-1")

        assert exc_info.value.error_detail.error_code == GradingErrorCode.INVALID_INPUT
        assert exc_info.value.details["question_id"] == expected_question
        assert exc_info.value.details["attempt_id"] == "attempt-1"


class TestScoreObjectiveAnswers:
    def test_exact_matches_earn_full_points(self, mixed_exam: Exam) -> None:
        answers = validate_answers(
            mixed_exam,
            [
                MultipleChoiceAnswer(question_id="q1", selected_index=1),
                TrueFalseAnswer(question_id="q2", value=True),
                ShortAnswerResponse(question_id="q3", text="Light becomes sugar"),
            ],
            "attempt-1",
        )

        assert score_objective_answers(mixed_exam, answers) == 5

    def test_wrong_answers_earn_nothing(self, mixed_exam: Exam) -> None:
        answers = validate_answers(
            mixed_exam,
            [
                MultipleChoiceAnswer(question_id="q1", selected_index=2),
                TrueFalseAnswer(question_id="q2", value=False),
            ],
            "attempt-1",
        )

        assert score_objective_answers(mixed_exam, answers) == 0

    def test_unanswered_questions_score_zero(self, mixed_exam: Exam) -> None:
        answers = validate_answers(
            mixed_exam, [TrueFalseAnswer(question_id="q2", value=True)], "attempt-1"
        )

        assert score_objective_answers(mixed_exam, answers) == 3
        assert score_objective_answers(mixed_exam, {}) == 0

    def test_short_answers_never_auto_score(self, mixed_exam: Exam) -> None:
        answers = validate_answers(
            mixed_exam, [ShortAnswerResponse(question_id="q3", text="anything")], "attempt-1"
        )

        assert score_objective_answers(mixed_exam, answers) == 0

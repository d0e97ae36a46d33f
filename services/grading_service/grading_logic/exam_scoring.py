"""
Answer validation and objective scoring for exam submissions.

Multiple choice and true/false questions earn their full points on an exact
match with the answer key and nothing otherwise. Short answer questions are
never auto-scored.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from gradebook_core.domain_enums import QuestionKind
from gradebook_core.exam_models import Exam, ExamAnswer
from gradebook_service_libs.error_handling import raise_invalid_input
from pydantic import TypeAdapter, ValidationError

from services.grading_service.constants import SERVICE_NAME

_answers_adapter: TypeAdapter[list[ExamAnswer]] = TypeAdapter(list[ExamAnswer])


def parse_answers(
    answers: Sequence[ExamAnswer | Mapping[str, Any]], attempt_id: str
) -> list[ExamAnswer]:
    """Validate a submitted payload against the tagged answer variants.

    Accepts answer models or their dict form; anything that does not match a
    variant raises INVALID_INPUT.
    """
    try:
        return _answers_adapter.validate_python(answers)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise_invalid_input(
            service=SERVICE_NAME,
            operation="submit",
            field="answers",
            message=f"Malformed answers payload: {first['msg']}",
            attempt_id=attempt_id,
            error_count=exc.error_count(),
            location=".".join(str(part) for part in first["loc"]),
        )


def validate_answers(
    exam: Exam, answers: Sequence[ExamAnswer], attempt_id: str
) -> dict[str, ExamAnswer]:
    """Check answers against the exam's questions and key them by question id.

    Raises INVALID_INPUT for an unknown question, a duplicate answer, a kind
    that differs from the question's kind, or a choice outside the options.
    """
    questions = exam.questions_by_id
    keyed: dict[str, ExamAnswer] = {}

    for answer in answers:
        question = questions.get(answer.question_id)
        if question is None:
            raise_invalid_input(
                service=SERVICE_NAME,
                operation="submit",
                field="answers",
                message=f"Answer references unknown question '{answer.question_id}'",
                attempt_id=attempt_id,
                question_id=answer.question_id,
            )
        if answer.question_id in keyed:
            raise_invalid_input(
                service=SERVICE_NAME,
                operation="submit",
                field="answers",
                message=f"Question '{answer.question_id}' was answered more than once",
                attempt_id=attempt_id,
                question_id=answer.question_id,
            )
        if answer.kind != question.kind:
            raise_invalid_input(
                service=SERVICE_NAME,
                operation="submit",
                field="answers",
                message=(
                    f"Answer kind '{QuestionKind(answer.kind).value}' does not match "
                    f"question '{question.id}' of kind '{question.kind.value}'"
                ),
                attempt_id=attempt_id,
                question_id=question.id,
            )
        if question.kind is QuestionKind.MULTIPLE_CHOICE and not (
            0 <= answer.response < len(question.options)
        ):
            raise_invalid_input(
                service=SERVICE_NAME,
                operation="submit",
                field="answers",
                message=f"Choice {answer.response} is outside the options of '{question.id}'",
                value=answer.response,
                attempt_id=attempt_id,
                question_id=question.id,
            )
        keyed[answer.question_id] = answer

    return keyed


def score_objective_answers(exam: Exam, answers: dict[str, ExamAnswer]) -> int:
    """Points earned on objective questions; unanswered questions earn 0."""
    auto_score = 0
    for question in exam.questions:
        if not question.kind.is_auto_gradable:
            continue
        answer = answers.get(question.id)
        if answer is None:
            continue
        # type() keeps True from matching an answer key of 1
        if type(answer.response) is type(question.correct_answer) and (
            answer.response == question.correct_answer
        ):
            auto_score += question.points
    return auto_score

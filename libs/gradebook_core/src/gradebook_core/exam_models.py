"""Exam, question, answer and attempt models.

ExamQuestion: One question with its answer key and point value.
Exam: A set of questions whose points sum to the exam's total.
ExamAnswer: Tagged union of per-kind student responses.
ExamAttempt: One student's attempt at one exam.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, model_validator

from .domain_enums import QuestionKind
from .status_enums import ExamAttemptStatus

__all__ = [
    "Exam",
    "ExamAnswer",
    "ExamAttempt",
    "ExamQuestion",
    "MultipleChoiceAnswer",
    "ShortAnswerResponse",
    "TrueFalseAnswer",
]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ExamQuestion(BaseModel):
    """One exam question.

    correct_answer is an option index for multiple choice, a boolean for
    true/false and absent for short answer.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    kind: QuestionKind
    prompt: str = ""
    options: list[str] = Field(default_factory=list)
    correct_answer: StrictInt | StrictBool | None = None
    points: int = Field(ge=0)

    @model_validator(mode="after")
    def _validate_answer_key(self) -> ExamQuestion:
        if self.kind is QuestionKind.MULTIPLE_CHOICE:
            if not self.options:
                raise ValueError(f"Multiple choice question '{self.id}' needs options")
            key = self.correct_answer
            if isinstance(key, bool) or not isinstance(key, int):
                raise ValueError(
                    f"Multiple choice question '{self.id}' needs an integer correct_answer"
                )
            if not 0 <= key < len(self.options):
                raise ValueError(
                    f"correct_answer {key} is outside the options of question '{self.id}'"
                )
        elif self.kind is QuestionKind.TRUE_FALSE:
            if not isinstance(self.correct_answer, bool):
                raise ValueError(
                    f"True/false question '{self.id}' needs a boolean correct_answer"
                )
        elif self.correct_answer is not None:
            raise ValueError(f"Short answer question '{self.id}' cannot have a correct_answer")
        return self


class Exam(BaseModel):
    """An exam belonging to a course.

    Invariant: total_points equals the sum of question points.
    first_attempt_timestamp is set once, when the first student starts.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    course_id: str
    title: str
    questions: list[ExamQuestion]
    total_points: int = Field(ge=0)
    first_attempt_timestamp: datetime | None = None

    @model_validator(mode="after")
    def _validate_questions(self) -> Exam:
        ids = [question.id for question in self.questions]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Question ids must be unique within exam: {ids}")
        question_total = sum(question.points for question in self.questions)
        if question_total != self.total_points:
            raise ValueError(
                f"total_points {self.total_points} does not match question points {question_total}"
            )
        return self

    @property
    def questions_by_id(self) -> dict[str, ExamQuestion]:
        return {question.id: question for question in self.questions}

    @property
    def has_manual_questions(self) -> bool:
        return any(not q.kind.is_auto_gradable for q in self.questions)

    @property
    def total_auto_points(self) -> int:
        """Points of every objectively scored question, answered or not."""
        return sum(q.points for q in self.questions if q.kind.is_auto_gradable)

    def student_view(self) -> Exam:
        """Copy of the exam with every answer key removed."""
        return self.model_copy(
            update={
                "questions": [
                    q.model_copy(update={"correct_answer": None}) for q in self.questions
                ]
            }
        )


class MultipleChoiceAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[QuestionKind.MULTIPLE_CHOICE] = QuestionKind.MULTIPLE_CHOICE
    question_id: str
    selected_index: StrictInt

    @property
    def response(self) -> int:
        return self.selected_index


class TrueFalseAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[QuestionKind.TRUE_FALSE] = QuestionKind.TRUE_FALSE
    question_id: str
    value: StrictBool

    @property
    def response(self) -> bool:
        return self.value


class ShortAnswerResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[QuestionKind.SHORT_ANSWER] = QuestionKind.SHORT_ANSWER
    question_id: str
    text: str

    @property
    def response(self) -> str:
        return self.text


ExamAnswer = Annotated[
    Union[MultipleChoiceAnswer, TrueFalseAnswer, ShortAnswerResponse],
    Field(discriminator="kind"),
]


class ExamAttempt(BaseModel):
    """One student's attempt at one exam.

    score is auto_score until a manual score is recorded, then
    auto_score + manual_score. answers is keyed by question id and only set
    at submission.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    exam_id: str
    student_id: str
    status: ExamAttemptStatus = ExamAttemptStatus.IN_PROGRESS
    answers: dict[str, ExamAnswer] = Field(default_factory=dict)
    auto_score: int = 0
    total_auto_points: int = 0
    manual_score: float | None = None
    score: float = 0.0
    feedback: str | None = None
    is_graded: bool = False
    started_at: datetime = Field(default_factory=_utcnow)
    submitted_at: datetime | None = None
    graded_at: datetime | None = None

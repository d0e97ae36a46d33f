"""
Pytest configuration and fixtures for Grading Service tests.

Provides calculators bound to the default grade scale, isolated Prometheus
metrics, an in-memory store and sample exams.
"""

from __future__ import annotations

import pytest
from gradebook_core.domain_enums import QuestionKind
from gradebook_core.exam_models import Exam, ExamQuestion
from gradebook_core.grade_scales import DEFAULT_SCALE_ID, GradeScaleMetadata, get_scale
from prometheus_client import CollectorRegistry

from services.grading_service.config import Settings
from services.grading_service.grading_logic.gpa import GpaAggregator
from services.grading_service.grading_logic.letter_grades import LetterGradeConverter
from services.grading_service.grading_logic.weighted_average import WeightedGradeCalculator
from services.grading_service.implementations.in_memory_repository_impl import (
    InMemoryGradebookRepository,
)
from services.grading_service.metrics import GradingMetrics


@pytest.fixture
def default_scale() -> GradeScaleMetadata:
    return get_scale(DEFAULT_SCALE_ID)


@pytest.fixture
def converter(default_scale: GradeScaleMetadata) -> LetterGradeConverter:
    return LetterGradeConverter(default_scale)


@pytest.fixture
def calculator() -> WeightedGradeCalculator:
    return WeightedGradeCalculator()


@pytest.fixture
def gpa_aggregator() -> GpaAggregator:
    return GpaAggregator()


@pytest.fixture
def metrics() -> GradingMetrics:
    """Metrics on a private registry so tests never collide on the global one."""
    return GradingMetrics(registry=CollectorRegistry())


@pytest.fixture
def test_settings() -> Settings:
    return Settings(BATCH_MAX_CONCURRENCY=2, DEFAULT_COURSE_CREDITS=3.0)


@pytest.fixture
def repository() -> InMemoryGradebookRepository:
    return InMemoryGradebookRepository()


@pytest.fixture
def mixed_exam() -> Exam:
    """Exam with one question of each kind: 2 + 3 auto points, 5 manual points."""
    return Exam(
        id="exam-mixed",
        course_id="course-1",
        title="Midterm",
        questions=[
            ExamQuestion(
                id="q1",
                kind=QuestionKind.MULTIPLE_CHOICE,
                prompt="Pick b",
                options=["a", "b", "c"],
                correct_answer=1,
                points=2,
            ),
            ExamQuestion(
                id="q2",
                kind=QuestionKind.TRUE_FALSE,
                prompt="The sky is blue",
                correct_answer=True,
                points=3,
            ),
            ExamQuestion(
                id="q3",
                kind=QuestionKind.SHORT_ANSWER,
                prompt="Explain photosynthesis",
                points=5,
            ),
        ],
        total_points=10,
    )


@pytest.fixture
def objective_exam() -> Exam:
    """Exam without short answer questions."""
    return Exam(
        id="exam-objective",
        course_id="course-1",
        title="Quiz",
        questions=[
            ExamQuestion(
                id="q1",
                kind=QuestionKind.MULTIPLE_CHOICE,
                options=["yes", "no"],
                correct_answer=0,
                points=4,
            ),
            ExamQuestion(id="q2", kind=QuestionKind.TRUE_FALSE, correct_answer=False, points=6),
        ],
        total_points=10,
    )

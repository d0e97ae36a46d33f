"""Service-specific metrics for Grading Service."""

from __future__ import annotations

from typing import Any

from gradebook_service_libs.logging_utils import create_service_logger
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

logger = create_service_logger("grading_service.metrics")


class GradingMetrics:
    """Business metrics for grade calculation and the exam attempt lifecycle.

    Each instance registers its collectors on the given registry, so tests can
    build isolated instances against a fresh CollectorRegistry.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        self.grade_calculations_total = Counter(
            "grading_grade_calculations_total",
            "Course grade calculations",
            ["method", "outcome"],
            registry=self.registry,
        )

        self.exam_attempt_transitions_total = Counter(
            "grading_exam_attempt_transitions_total",
            "Exam attempt state transitions",
            ["trigger", "to_status"],
            registry=self.registry,
        )

        self.exam_attempts_started_total = Counter(
            "grading_exam_attempts_started_total",
            "Exam attempts started",
            registry=self.registry,
        )

        self.batch_calculation_duration = Histogram(
            "grading_batch_calculation_duration_seconds",
            "Duration of course-wide grade calculations",
            registry=self.registry,
        )

        self.batch_student_failures_total = Counter(
            "grading_batch_student_failures_total",
            "Students whose grade could not be calculated in a batch",
            ["error_code"],
            registry=self.registry,
        )

        logger.debug("Grading metrics registered")

    def record_grade_calculation(self, method: str, outcome: str) -> None:
        self.grade_calculations_total.labels(method=method, outcome=outcome).inc()

    def record_transition(self, trigger: str, to_status: str) -> None:
        self.exam_attempt_transitions_total.labels(trigger=trigger, to_status=to_status).inc()

    def get_all_metrics(self) -> dict[str, Any]:
        return {
            "grade_calculations_total": self.grade_calculations_total,
            "exam_attempt_transitions_total": self.exam_attempt_transitions_total,
            "exam_attempts_started_total": self.exam_attempts_started_total,
            "batch_calculation_duration": self.batch_calculation_duration,
            "batch_student_failures_total": self.batch_student_failures_total,
        }

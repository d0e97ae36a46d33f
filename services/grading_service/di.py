"""Dependency injection configuration for Grading Service."""

from __future__ import annotations

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from gradebook_core.grade_scales import GradeScaleMetadata, get_scale
from gradebook_service_libs.logging_utils import create_service_logger
from prometheus_client import REGISTRY, CollectorRegistry

from services.grading_service.config import Settings
from services.grading_service.grading_logic.gpa import GpaAggregator
from services.grading_service.grading_logic.letter_grades import LetterGradeConverter
from services.grading_service.grading_logic.weighted_average import WeightedGradeCalculator
from services.grading_service.implementations.exam_attempt_service_impl import (
    ExamAttemptServiceImpl,
)
from services.grading_service.implementations.grade_service_impl import GradeServiceImpl
from services.grading_service.implementations.in_memory_repository_impl import (
    InMemoryGradebookRepository,
)
from services.grading_service.metrics import GradingMetrics
from services.grading_service.protocols import (
    CourseCatalogProtocol,
    EnrollmentRepositoryProtocol,
    ExamAttemptServiceProtocol,
    ExamRepositoryProtocol,
    GradedWorkRepositoryProtocol,
    GradeRecordRepositoryProtocol,
    GradeServiceProtocol,
)

logger = create_service_logger("grading_service.di")


class CoreInfrastructureProvider(Provider):
    """Provider for settings, metrics and the grade scale."""

    scope = Scope.APP

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self._settings = settings

    @provide
    def provide_settings(self) -> Settings:
        return self._settings if self._settings is not None else Settings()

    @provide
    def provide_collector_registry(self) -> CollectorRegistry:
        """Provide the default Prometheus collector registry."""
        return REGISTRY

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> GradingMetrics:
        return GradingMetrics(registry=registry)

    @provide
    def provide_grade_scale(self, settings: Settings) -> GradeScaleMetadata:
        """Resolve the configured grade scale; unknown scale ids fail at startup."""
        scale = get_scale(settings.GRADE_SCALE_ID)
        logger.info("Grade scale resolved", scale_id=scale.scale_id, bands=len(scale.bands))
        return scale


class GradingLogicProvider(Provider):
    """Provider for the pure grade calculators."""

    scope = Scope.APP

    @provide
    def provide_letter_grade_converter(self, scale: GradeScaleMetadata) -> LetterGradeConverter:
        return LetterGradeConverter(scale)

    @provide
    def provide_weighted_grade_calculator(self) -> WeightedGradeCalculator:
        return WeightedGradeCalculator()

    @provide
    def provide_gpa_aggregator(self) -> GpaAggregator:
        return GpaAggregator()


class RepositoryProvider(Provider):
    """Binds the in-memory store to every collaborator protocol."""

    scope = Scope.APP

    repository = provide(InMemoryGradebookRepository)

    @provide
    def provide_graded_work(
        self, repository: InMemoryGradebookRepository
    ) -> GradedWorkRepositoryProtocol:
        return repository

    @provide
    def provide_enrollment(
        self, repository: InMemoryGradebookRepository
    ) -> EnrollmentRepositoryProtocol:
        return repository

    @provide
    def provide_grade_records(
        self, repository: InMemoryGradebookRepository
    ) -> GradeRecordRepositoryProtocol:
        return repository

    @provide
    def provide_course_catalog(
        self, repository: InMemoryGradebookRepository
    ) -> CourseCatalogProtocol:
        return repository

    @provide
    def provide_exam_repository(
        self, repository: InMemoryGradebookRepository
    ) -> ExamRepositoryProtocol:
        return repository


class ServiceProvider(Provider):
    """Provider for the exam attempt and grade services."""

    scope = Scope.APP

    @provide
    def provide_exam_attempt_service(
        self, repository: ExamRepositoryProtocol, metrics: GradingMetrics
    ) -> ExamAttemptServiceProtocol:
        return ExamAttemptServiceImpl(repository=repository, metrics=metrics)

    @provide
    def provide_grade_service(
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
    ) -> GradeServiceProtocol:
        return GradeServiceImpl(
            graded_work=graded_work,
            enrollment=enrollment,
            grade_records=grade_records,
            course_catalog=course_catalog,
            converter=converter,
            calculator=calculator,
            gpa_aggregator=gpa_aggregator,
            settings=settings,
            metrics=metrics,
        )


def create_container(
    *extra_providers: Provider, settings: Settings | None = None
) -> AsyncContainer:
    """Build the service container; extra providers are appended for overrides."""
    return make_async_container(
        CoreInfrastructureProvider(settings),
        GradingLogicProvider(),
        RepositoryProvider(),
        ServiceProvider(),
        *extra_providers,
    )

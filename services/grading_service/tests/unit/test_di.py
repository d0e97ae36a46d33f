"""Unit tests for the Grading Service DI container wiring."""

from __future__ import annotations

import pytest
from dishka import Provider, Scope, provide
from gradebook_core.grade_scales import GradeScaleMetadata
from prometheus_client import CollectorRegistry

from services.grading_service.config import Settings
from services.grading_service.di import create_container
from services.grading_service.implementations.grade_service_impl import GradeServiceImpl
from services.grading_service.implementations.in_memory_repository_impl import (
    InMemoryGradebookRepository,
)
from services.grading_service.protocols import (
    CourseCatalogProtocol,
    ExamAttemptServiceProtocol,
    ExamRepositoryProtocol,
    GradedWorkRepositoryProtocol,
    GradeServiceProtocol,
)


class IsolatedRegistryProvider(Provider):
    """Overrides the global Prometheus registry with a fresh one."""

    scope = Scope.APP

    @provide
    def provide_collector_registry(self) -> CollectorRegistry:
        return CollectorRegistry()


async def test_container_wires_services_to_one_store() -> None:
    container = create_container(IsolatedRegistryProvider(), settings=Settings())
    try:
        grade_service = await container.get(GradeServiceProtocol)
        exam_service = await container.get(ExamAttemptServiceProtocol)
        store = await container.get(InMemoryGradebookRepository)

        assert isinstance(grade_service, GradeServiceImpl)
        assert exam_service is not None
        assert await container.get(GradedWorkRepositoryProtocol) is store
        assert await container.get(ExamRepositoryProtocol) is store
        assert await container.get(CourseCatalogProtocol) is store
    finally:
        await container.close()


async def test_configured_scale_is_injected_into_converter() -> None:
    container = create_container(
        IsolatedRegistryProvider(), settings=Settings(GRADE_SCALE_ID="us_letter_simple")
    )
    try:
        scale = await container.get(GradeScaleMetadata)
        grade_service = await container.get(GradeServiceProtocol)

        assert scale.scale_id == "us_letter_simple"
        assert isinstance(grade_service, GradeServiceImpl)
        assert grade_service.converter.scale is scale
    finally:
        await container.close()


async def test_unknown_scale_fails_fast() -> None:
    container = create_container(
        IsolatedRegistryProvider(), settings=Settings(GRADE_SCALE_ID="percent_only")
    )
    try:
        with pytest.raises(ValueError, match="Unknown grade scale"):
            await container.get(GradeScaleMetadata)
    finally:
        await container.close()


def test_default_weights_follow_settings() -> None:
    weights = Settings(DEFAULT_ASSIGNMENT_WEIGHT=50, DEFAULT_EXAM_WEIGHT=30).default_weights()

    assert weights.assignment_weight == 50
    assert weights.exam_weight == 30
    assert weights.participation_weight == 0
    assert weights.participation_grade is None

"""Startup and shutdown logic for Grading Service."""

from __future__ import annotations

from dishka import AsyncContainer
from gradebook_service_libs.logging_utils import configure_service_logging, create_service_logger

from services.grading_service.config import Settings
from services.grading_service.config import settings as default_settings
from services.grading_service.di import create_container

# Global reference for DI container, kept for shutdown
_app_container_ref: AsyncContainer | None = None


def initialize_logging(settings: Settings = default_settings) -> None:
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )


def create_di_container(settings: Settings = default_settings) -> AsyncContainer:
    """Configure logging, then create and return the DI AsyncContainer."""
    global _app_container_ref
    initialize_logging(settings)
    logger = create_service_logger("grading_service.startup")

    container = create_container(settings=settings)
    _app_container_ref = container
    logger.info(
        "DI AsyncContainer created",
        environment=settings.ENVIRONMENT.value,
        grade_scale_id=settings.GRADE_SCALE_ID,
    )
    return container


async def shutdown_services() -> None:
    """Close the DI container created at startup."""
    global _app_container_ref
    logger = create_service_logger("grading_service.startup")

    if _app_container_ref is not None:
        await _app_container_ref.close()
        _app_container_ref = None
        logger.info("Grading Service DI container closed")

"""
structlog setup shared by gradebook services.

Console rendering in development, JSON in production or when LOG_FORMAT=json.
LOG_TO_FILE, LOG_FILE_PATH, LOG_MAX_BYTES and LOG_BACKUP_COUNT control the
optional rotating file sink.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import Processor

_TRUTHY = ("true", "1", "yes")


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp every event with the service name and deployment environment."""
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def _processor_chain(use_json: bool) -> list[Processor]:
    chain: list[Processor] = [
        merge_contextvars,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]
    if use_json:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        chain += [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=True)]
    return chain


def _rotating_file_handler(path: str) -> RotatingFileHandler:
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(log_file),
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
) -> None:
    """
    Route structlog through stdlib logging for one service process.

    Args:
        service_name: Reported as service.name and used for the default log file
        environment: Falls back to the ENVIRONMENT variable, then "development"
        log_level: Root logger level name
        log_to_file: Falls back to the LOG_TO_FILE variable
        log_file_path: Falls back to LOG_FILE_PATH, then logs/<service_name>.log
    """
    environment = environment or os.getenv("ENVIRONMENT", "development")
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "false").lower() in _TRUTHY

    log_format = os.getenv("LOG_FORMAT", "").lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        path = log_file_path or os.getenv("LOG_FILE_PATH", f"logs/{service_name}.log")
        handlers.append(_rotating_file_handler(path))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, log_level.upper()),
        force=True,
    )
    structlog.configure(
        processors=_processor_chain(use_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """Return a structlog logger, bound to logger_name when a name is given."""
    logger = structlog.get_logger()
    return logger.bind(logger_name=name) if name else logger


def bind_operation_context(correlation_id: UUID, operation: str, **context: Any) -> None:
    """
    Replace the contextvars-bound logging context for one operation.

    Every log line emitted afterwards in the same task carries the
    correlation id and operation name.
    """
    clear_contextvars()
    bind_contextvars(correlation_id=str(correlation_id), operation=operation, **context)

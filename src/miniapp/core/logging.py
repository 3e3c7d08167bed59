"""
loguru setup for the token-exchange server and the CLI.

Every record carries a ``trace_id`` extra taken from the request being
served ("N/A" outside a request). Standard-library loggers used by uvicorn,
httpx and fastapi are routed into loguru, and health-check polls are kept
out of the access log.
"""

import contextvars
import logging
import sys
from typing import Any

from loguru import logger

from miniapp.config import settings
from miniapp.core.uvicorn_filters import HealthCheckFilter

# Set by RequestLogMiddleware for the duration of one request
trace_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trace_id", default=None
)

INTERCEPTED_LOGGERS: tuple[str, ...] = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "fastapi",
)


def add_trace_id(record: dict[str, Any]) -> bool:
    """Sink filter: stamp the current request's trace_id on the record."""
    record["extra"]["trace_id"] = trace_id_context.get() or "N/A"
    return True


def configure_logger(level: str | None = None) -> None:
    """
    Replace loguru's default handler with the configured stderr sink.

    Args:
        level: Level overriding LOG_LEVEL, e.g. from a CLI flag
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
        filter=add_trace_id,
        colorize=True,
        backtrace=True,
        # Variable values in tracebacks may include credentials
        diagnose=not settings.is_production,
        enqueue=settings.logger_enqueue,
    )


configure_logger()


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging() -> None:
    """
    Route uvicorn, httpx and fastapi logging through loguru.

    Called once by the server entry point before uvicorn starts.
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


__all__ = [
    "InterceptHandler",
    "configure_logger",
    "intercept_standard_logging",
    "logger",
    "trace_id_context",
]

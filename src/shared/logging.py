"""Logging configuration shared by all storefront contexts.

Standard library logging carries the handlers; structlog renders on top of
it. Call ``configure_logging`` once at application start-up.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

import structlog

from shared.config import get_settings


def setup_stdlib_logging(level: str, log_dir: str | None = None, log_file_prefix: str = "skyelectrotech") -> None:
    """Configure standard library logging."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=directory / f"{log_file_prefix}.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=directory / f"{log_file_prefix}_error.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(error_handler)

    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


def setup_structlog(env: str) -> None:
    """Configure structlog for structured logging."""
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.contextvars.merge_contextvars,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if env in ["production", "staging"]:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=True,
                    max_frames=2,
                ),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None, log_file_prefix: str = "skyelectrotech") -> None:
    """Configure all logging for the application."""
    settings = get_settings()
    setup_stdlib_logging(settings.log_level, log_dir or settings.log_dir, log_file_prefix)
    setup_structlog(settings.env)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Add context variables that will be included in all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()

"""Structured logging configuration using structlog.

Logging is diagnostic only: nothing logged here feeds back into a triage
decision. This module provides:
- JSON output for production (machine-parseable)
- Console output for development (human-readable)
- Context variable binding so every line of one assessment shares its case hash
- Caller information (file, line, function)
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator

    from attention_triage.config import LoggingSettings


def setup_logging(settings: LoggingSettings | None = None, stream: TextIO | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        settings: Logging settings. If None, uses defaults from config.
        stream: Output stream. Defaults to stdout; the CLI passes stderr so
            stdout only carries the triage outcome.
    """
    if settings is None:
        from attention_triage.config import get_settings  # noqa: PLC0415

        settings = get_settings().logging

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if settings.include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    shared_processors.append(structlog.processors.StackInfoRenderer())

    if settings.include_caller:
        shared_processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    if settings.format == "json":
        renderer: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream if stream is not None else sys.stdout,
        level=getattr(logging, settings.level),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__).

    Returns:
        Configured structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: str | int | float | bool) -> None:
    """Bind context variables for the current execution context.

    Args:
        **kwargs: Key-value pairs to include in every subsequent log line.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Unbind context variables.

    Args:
        *keys: Keys to unbind.
    """
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def bound_context(**context_vars: str | int | float | bool) -> Iterator[None]:
    """Bind context variables for the duration of a `with` block.

    Context is removed on exit, even if the block raises.

    Args:
        **context_vars: Context variables to bind.
    """
    bind_context(**context_vars)
    try:
        yield
    finally:
        unbind_context(*context_vars.keys())

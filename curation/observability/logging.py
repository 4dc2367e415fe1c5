"""structlog setup shared by the CLI and the coordinator."""

import logging
import sys
from typing import TextIO

import structlog

SESSION_KEY = "session_id"


def _renderer(json_format: bool, output: TextIO) -> structlog.types.Processor:
    if json_format:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=output.isatty())


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Route structlog events to ``output``.

    Args:
        level: Events below this level are dropped.
        output: Stream for rendered events.
        json_format: JSON lines when True, console output otherwise.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_format, output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    # httpx logs through the standard library
    logging.basicConfig(format="%(message)s", stream=output, level=level)


def bind_session_context(session_id: str) -> None:
    """Tag every following log event with the editor session id."""
    structlog.contextvars.bind_contextvars(**{SESSION_KEY: session_id})


def clear_session_context() -> None:
    """Drop the editor session id from the log context."""
    structlog.contextvars.unbind_contextvars(SESSION_KEY)

"""Structured logging configuration."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog


def parse_log_level(name: str, default: int = logging.INFO) -> int:
    """Resolve a level name such as ``"debug"`` to its numeric value.

    Args:
        name: Level name, case-insensitive.
        default: Level returned for unknown names.

    Returns:
        Numeric logging level.
    """
    return logging.getLevelNamesMapping().get(name.upper(), default)


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Configure structlog for picker commands.

    Args:
        level: Minimum level to emit.
        output: Destination stream. Defaults to the current ``sys.stderr``.
        json_format: Render JSON lines instead of the console format.
    """
    stream = output if output is not None else sys.stderr
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=stream.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=level)


@contextmanager
def session_log_context(session_id: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with ``session_id``.

    Args:
        session_id: Picker session identifier.
    """
    structlog.contextvars.bind_contextvars(session_id=session_id)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars("session_id")

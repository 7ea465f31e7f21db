"""Observability helpers for picker commands."""

from src.observability.logging import (
    configure_logging,
    parse_log_level,
    session_log_context,
)


__all__ = [
    "configure_logging",
    "parse_log_level",
    "session_log_context",
]

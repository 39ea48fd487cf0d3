"""Structured logging for the Blockmon engine.

Engine modules only emit events through ``get_logger(__name__)``. An
embedding service calls ``configure_logging`` once, normally straight
from the loaded ``Settings``, to choose the level and the console or
JSON renderer. Battles and expeditions wrap their work in
``log_context`` so every event they emit carries their seed.

Example:
    >>> from blockmon.core.logging import configure_logging, log_context
    >>> configure_logging(level="DEBUG")
    >>> with log_context(match="squad-00000000000000ff"):
    ...     get_logger(__name__).info("Squad match started")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.types import Processor

from blockmon.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


ENGINE_TAG = "blockmon"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every log entry with the engine name."""
    event_dict.setdefault("app", ENGINE_TAG)
    return event_dict


def _renderers(json_format: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the engine.

    Args:
        settings: Source of ``log_level`` and ``json_logs``; defaults to
            the loaded settings.
        level: Overrides ``settings.log_level``.
        json_format: Overrides ``settings.json_logs``.
        stream: Where rendered events go; defaults to stderr.
    """
    settings = settings or get_settings()
    level_name = (level or settings.log_level).upper()
    threshold = logging.getLevelNamesMapping().get(level_name, logging.INFO)
    json_output = settings.json_logs if json_format is None else json_format

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_context,
            *_renderers(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        # Module-level loggers must pick up a later reconfiguration.
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger for an engine module."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Tag every event emitted inside the block with ``kwargs``.

    Values bound by an enclosing block are restored on exit, so a battle
    inside an expedition carries both ids and leaves only the
    expedition's afterwards.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "ENGINE_TAG",
    "configure_logging",
    "get_logger",
    "log_context",
]

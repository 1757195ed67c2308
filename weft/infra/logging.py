"""
Logging setup

Library modules log through ``logging.getLogger(__name__)``; applications
call ``configure_logging`` once to render those records through structlog.
"""

from __future__ import annotations

import logging
import sys

import structlog

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """Route stdlib and structlog records through one structlog renderer.

    Unknown level names fall back to INFO. Safe to call repeatedly.
    """
    level_name = log_level.upper() if log_level else "INFO"
    if level_name not in _LEVELS:
        level_name = "INFO"
    level = getattr(logging, level_name)

    shared = _shared_processors()
    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_weft_handler", False):
            root.removeHandler(existing)
    handler._weft_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str | None = None, **initial_values) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name, **initial_values)

"""Logging configuration for Tubely.

Service modules log through ``logging.getLogger(__name__)`` with ``extra=``
context; the auth service uses ``structlog.get_logger``. Both end up on one
root handler that renders JSON lines, so ``extra`` fields such as
``video_id`` or ``orphaned_key`` appear as top-level keys.
"""

from __future__ import annotations

import logging
import os

import structlog

HANDLER_NAME = "tubely.json"


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def build_json_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*_shared_processors(), structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    return handler


def configure_logging(level: str | int | None = None) -> None:
    """Install the JSON handler on the root logger; safe to call repeatedly.

    ``level`` falls back to ``LOG_LEVEL`` and then ``INFO``.
    """
    resolved = level if level is not None else os.getenv("LOG_LEVEL", "INFO")
    if isinstance(resolved, str):
        resolved = resolved.upper()

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(build_json_handler())
    root.setLevel(resolved)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

"""
Logging setup - Camp Evaluation API
camp_eval/logging_config.py

Configures structlog once at startup from LOG_LEVEL / LOG_FORMAT.
"""

import logging

import structlog

from camp_eval.config import settings


def configure_logging() -> None:
    level = getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(level=level, format="%(levelname)s | %(name)s | %(message)s")

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

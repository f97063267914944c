"""Logging configuration for the Analytics domain."""

import logging
import sys

import structlog


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog for console or JSON output.

    Defaults come from settings so the runner and the test suite log the
    same way unless overridden.
    """
    from analytics.config import get_settings

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    render_json = settings.log_json if json is None else json

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level_name)

    # Suppress noisy library loggers
    logging.getLogger("protean").setLevel(logging.WARNING)

    renderer = structlog.processors.JSONRenderer() if render_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

"""Structured logging configuration using structlog.

Ingestion runs are batch jobs: JSON lines when scheduled, colored console
output when run by hand.
"""

import logging
import sys
from typing import Optional

import structlog
from app.config import Settings, get_settings

# Libraries whose INFO output drowns the per-batch events
QUIET_LOGGERS = ("aiosqlite", "asyncpg")


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Pipeline modules log key/value events through structlog; the store
    service logs through stdlib logging. Both end up in the same renderer.
    """
    settings = settings or get_settings()

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_development or settings.LOG_FORMAT == "text":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # SQLALCHEMY_ECHO also turns on statement logging through this handler
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.SQLALCHEMY_ECHO else logging.WARNING
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

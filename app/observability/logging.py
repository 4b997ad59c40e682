"""
Structured logging configuration using structlog.
JSON lines for the API, coloured console for dev and the CLI runner.
"""

import logging
import sys
from typing import Optional

import structlog

from app.config import settings


def setup_logging(level: Optional[str] = None, console: Optional[bool] = None) -> None:
    """
    Configure structlog on top of the stdlib root logger.

    level and console default to LOG_LEVEL and DEBUG from settings.
    """
    level = (level or settings.LOG_LEVEL).upper()
    console = settings.DEBUG if console is None else console

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if console:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)

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
            renderer,
        ],
    )

    # stderr keeps the CLI's stdout clean for the report path
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    # pdfminer logs every malformed object it recovers from
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    for name in ("pdfminer", "pdfplumber"):
        logging.getLogger(name).setLevel(logging.ERROR)

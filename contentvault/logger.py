"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import structlog

LOG_LEVEL_ENV = "CONTENTVAULT_LOG_LEVEL"
JSON_LOGS_ENV = "CONTENTVAULT_JSON_LOGS"


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Configure structlog for the extraction service.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR). Defaults to
            ``$CONTENTVAULT_LOG_LEVEL`` or INFO.
        json_output: If True, output JSON lines; else human-readable console.
            Defaults to ``$CONTENTVAULT_JSON_LOGS``.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if json_output is None:
        json_output = os.environ.get(JSON_LOGS_ENV, "").lower() in ("1", "true", "yes")
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

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

    # stderr keeps stdout clean for --json output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # chardet probers log every guess at DEBUG
    for noisy in ("urllib3", "asyncio", "aiohttp", "chardet"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

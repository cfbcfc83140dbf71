"""structlog setup: console output, optional JSONL file, quiet AWS SDK loggers."""

from __future__ import annotations

import logging
from typing import Any, Optional

import structlog

from ses_transport.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

# botocore logs every request/response at DEBUG/INFO
SDK_LOGGERS = ("botocore", "aiobotocore", "aiohttp", "urllib3")

_configured = False


def _coerce_level(level_name: str) -> int:
    """Translate a string/int environment value into a logging level."""
    if level_name.isdigit():
        return int(level_name)
    return getattr(logging, level_name.upper(), logging.INFO)


def _handler(handler: logging.Handler, renderer: Any, level: int, pre_chain: list) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def configure_logging(level: Optional[int] = None, log_file: Optional[str] = LOG_FILE) -> None:
    """Install the root handlers and structlog processors (idempotent)."""
    global _configured
    if _configured:
        return

    if level is None:
        level = logging.DEBUG if VERBOSE_LOGGING else _coerce_level(LOG_LEVEL)
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    handlers = [
        _handler(logging.StreamHandler(), structlog.dev.ConsoleRenderer(colors=True), level, pre_chain),
    ]
    if log_file:
        handlers.append(
            _handler(
                logging.FileHandler(log_file, encoding="utf-8"),
                structlog.processors.JSONRenderer(),
                level,
                pre_chain,
            )
        )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    for name in SDK_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "ses_transport", **bindings: Any) -> BoundLogger:
    """Return the structured logger, optionally bound with context."""
    configure_logging()
    logger = structlog.get_logger(name)
    if bindings:
        logger = logger.bind(**bindings)
    return logger

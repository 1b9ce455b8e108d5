"""Structured logging for the API server and the CLI, built on structlog.

Every line goes through one processor chain: request context (the
``request_id`` bound by RequestLoggingMiddleware), level, timestamp and a
redaction step that masks credential-looking keys before rendering.  Local
runs get a ConsoleRenderer; ``APP_ENV=production`` or ``json_output``
switches to JSON lines.

Standard-library ``logging`` (httpx, openai, uvicorn) is bridged through
the same chain.  The API server logs to stdout; the CLI passes
``stream=sys.stderr`` because its stdout carries the export summary.
"""

import logging
import os
import sys
from collections.abc import MutableMapping
from typing import Any, TextIO

import structlog

# Per-request chatter from the HTTP stack; one ``child_page_fetched`` line
# per call already says the same thing.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")

_SECRET_KEYS = frozenset({"api_key", "apikey", "authorization", "password", "token"})
_MASK = "***"


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask values whose key names a credential (``api_key``, ``authorization`` …)."""
    for key in event_dict:
        if key.lower() in _SECRET_KEYS and event_dict[key]:
            event_dict[key] = _MASK
    return event_dict


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger to share one output.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.  Unknown names fall back to INFO.
        json_output: Force JSON lines regardless of ``APP_ENV``.
        stream: Where both structlog and stdlib output go.  Defaults to stdout.
    """
    target = stream or sys.stdout
    level = _resolve_level(log_level)
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=target.isatty())
    )

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=target),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)

"""
Logging for VoiceDesk.

structlog wraps stdlib logging so the session controller's key/value
events and the plain ``logging`` calls in the parser, handlers and HTTP
clients end up on one stream with one format. While a command is handled,
its id and intent are bound as context variables and show up on every
line logged for it, from either kind of logger.

Environment:
    VOICEDESK_LOG_LEVEL    DEBUG, INFO (default), WARNING, ...
    VOICEDESK_LOG_FORMAT   "json" for one JSON object per line

Usage:
    from voicedesk.logging_config import command_context, setup_logging

    setup_logging(level="debug")
    with command_context(command.id, command.intent.value):
        ...
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import IO, Iterator

import structlog

HANDLER_NAME = "voicedesk"

# Third-party loggers that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | int | None = None) -> int:
    """Numeric level from an argument or $VOICEDESK_LOG_LEVEL; unknown names mean INFO."""
    if level is None:
        level = os.environ.get("VOICEDESK_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    value = getattr(logging, level.upper(), None)
    return value if isinstance(value, int) else logging.INFO


def _context_processors() -> list[structlog.types.Processor]:
    # Run for structlog events and, via foreign_pre_chain, for stdlib records
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def setup_logging(
    level: str | int | None = None,
    json_output: bool | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Route all logging through one structlog-formatted handler.

    Calling it again replaces the previous VoiceDesk handler; handlers
    installed by anything else are left alone. Voice feedback goes to
    stdout in the CLI, so logs default to stderr.

    Returns:
        The installed handler.
    """
    numeric_level = resolve_level(level)
    if json_output is None:
        json_output = os.environ.get("VOICEDESK_LOG_FORMAT", "").lower() == "json"

    structlog.configure(
        processors=[
            *_context_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # The CLI may reconfigure after modules have created their loggers
        cache_logger_on_first_use=False,
    )

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_context_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return handler


@contextmanager
def command_context(command_id: str, intent: str) -> Iterator[None]:
    """Tag every line logged inside the block with the command id and intent."""
    with structlog.contextvars.bound_contextvars(command_id=command_id, intent=intent):
        yield


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


__all__ = ["command_context", "get_logger", "resolve_level", "setup_logging"]

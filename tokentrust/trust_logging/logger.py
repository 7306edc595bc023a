"""
structlog setup for TokenTrust.

Every record carries an ISO-8601 UTC timestamp, the level, an event_type
(structlog's positional event, renamed) and the emitting module. Token
addresses passed as `token` are shortened so log lines stay scannable.

LOG_LEVEL (default INFO) and LOG_FORMAT (json | console, default json) are
read at import. Must not import other tokentrust modules: everything else
imports this one.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

TOKEN_DISPLAY_CHARS = 16


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _logger_field(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    name = event_dict.pop("logger_name", None)
    if name is not None:
        event_dict.setdefault("logger", name)
    return event_dict


def _shorten_token(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mint addresses are 32-44 chars; keep a recognizable prefix."""
    token = event_dict.get("token")
    if isinstance(token, str) and len(token) > TOKEN_DISPLAY_CHARS:
        event_dict["token"] = token[:TOKEN_DISPLAY_CHARS] + "..."
    return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    return structlog.PrintLogger(file=sys.stderr)


def configure_structlog(
    level: int = LOG_LEVEL_VALUE,
    fmt: str = LOG_FORMAT,
    to_stderr: bool = False,
) -> None:
    """
    (Re)configure structlog. Called once on import with env defaults; tools
    that print results on stdout call it again with to_stderr=True.

    The output stream is looked up per call, never captured here.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _event_type,
        _logger_field,
        _shorten_token,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        tty = (sys.stderr if to_stderr else sys.stdout).isatty()
        processors.append(structlog.dev.ConsoleRenderer(colors=tty))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger if to_stderr else structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger; records carry `logger: <name>`:

        logger = get_logger(__name__)
        logger.debug("risk_engine_result", token=address, score=42, risk_level="MEDIUM")

    The proxy resolves configuration on every call, so a later
    configure_structlog(to_stderr=True) applies to loggers created at import.
    """
    return structlog.get_logger(name, logger_name=name)


def bind_token(token: str, name: str = "tokentrust") -> structlog.BoundLogger:
    """Logger with `token` bound to every subsequent call (shortened on output)."""
    return structlog.get_logger(name, logger_name=name, token=token)

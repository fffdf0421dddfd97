"""Structured logging utilities for the prompter LLM layer.

Every module logs through a child of the shared ``prompter`` logger obtained
from :func:`get_logger`. Only the base logger owns handlers: one stderr
handler writing JSON lines, plus an optional rotating file handler attached by
:func:`configure_logger` (driven by the ``log_level``/``log_file`` settings).

Event helpers
-------------
``log_event`` serializes ``{"event": ..., **context, **fields}`` as the log
message. ``normalized_log_event`` adds the canonical keys ``structured``,
``phase``, ``attempt``, ``error_code``, ``emitted`` and ``tokens`` so the
``chat.*``, ``retry.attempt``, ``translate.*`` and ``format.error`` events can
be filtered uniformly.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional, Union

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "prompter"
LOG_LEVEL_ENV = "PROMPTER_LOG_LEVEL"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Marker attributes on handlers owned by this module.
_CONSOLE = "_prompter_console"
_FILE = "_prompter_file"


def _parse_level(value: Union[int, str, None], default: int = logging.INFO) -> int:
    """Return a numeric level for ``value``; unknown names give ``default``."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _owned(logger: logging.Logger, marker: str) -> list:
    return [h for h in logger.handlers if getattr(h, marker, False)]


def _drop(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(Exception):
        handler.close()


def _attach_console(logger: logging.Logger) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    setattr(handler, _CONSOLE, True)
    logger.addHandler(handler)


def _base_logger() -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    consoles = _owned(logger, _CONSOLE)
    if not consoles:
        logger.setLevel(_parse_level(os.getenv(LOG_LEVEL_ENV)))
        logger.propagate = False
        _attach_console(logger)
        return logger
    for handler in consoles:
        stream = getattr(handler, "stream", None)
        # pytest closes the captured stderr between tests
        if stream is None or getattr(stream, "closed", False):
            _drop(logger, handler)
            _attach_console(logger)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return ``name`` as a handler-less child propagating to ``prompter``."""
    base = _base_logger()
    if name == BASE_LOGGER_NAME:
        return base
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: Union[int, str, None] = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the base logger level and its optional log file.

    ``level=None`` keeps the current level. ``file_path=None`` detaches a file
    handler added earlier; otherwise a size-rotated file at ``file_path`` is
    attached, replacing one for a different path. ``json_mode=False`` writes
    plain text lines to the file.
    """
    logger = _base_logger()
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level))

    files = _owned(logger, _FILE)
    if file_path is None:
        for handler in files:
            _drop(logger, handler)
        return logger

    target = os.path.abspath(os.path.expanduser(file_path))
    keep: Optional[logging.Handler] = None
    for handler in files:
        if getattr(handler, "baseFilename", None) == target and keep is None:
            keep = handler
        else:
            _drop(logger, handler)
    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(
            target,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        setattr(keep, _FILE, True)
        logger.addHandler(keep)
    keep.setFormatter(JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log one JSON event; ``None`` fields are dropped unless ``keep_none``."""
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.info(json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "error_code", "emitted", "tokens")


def _tokens_payload(tokens: Any) -> Optional[Dict[str, Any]]:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    if callable(getattr(tokens, "to_dict", None)):
        return tokens.to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    phase: str,
    attempt: Optional[int] = None,
    error_code: Optional[str] = None,
    emitted: Optional[bool] = None,
    tokens: Any = None,
    structured: bool = True,
    **extra_fields: Any,
) -> None:
    """Log ``event`` with the canonical keys always present.

    ``error_code`` is left out when there is no error. Extra fields never
    replace a canonical key.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_payload(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and key not in fields:
            fields[key] = value
    log_event(logger, event, ctx, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]

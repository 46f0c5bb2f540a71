"""Logging setup shared by the core package and the server.

Call sites pass structured fields through ``extra``; the formatter appends
them to the message as ``key=value`` pairs.
"""

from __future__ import annotations

import logging
import sys

from trilium_explorer.config import TRILIUM_EXPLORER_LOG_LEVEL

_PACKAGE_LOGGERS = ("trilium_explorer", "server")
_HANDLER_NAME = "trilium_explorer"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that renders ``extra`` fields after the message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if not fields:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
        return f"{base} | {rendered}"


def configure_logging(level: str | int | None = None) -> None:
    """Install the stream handler on the package loggers (idempotent)."""
    resolved = level or TRILIUM_EXPLORER_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = resolved.upper()

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        ExtraFieldsFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )

    for name in _PACKAGE_LOGGERS:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(resolved)
        if not any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
            package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring the package handler on first use."""
    root_name = name.split(".", 1)[0]
    if root_name in _PACKAGE_LOGGERS and not logging.getLogger(root_name).handlers:
        configure_logging()
    return logging.getLogger(name)

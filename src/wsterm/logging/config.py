# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Centralized logging configuration for wsterm.

Logs always go to stderr because stdout carries the remote session output.
The level comes from ``WSTERM_LOG_LEVEL`` (default: WARNING) unless the caller
overrides it, e.g. from a ``--log-level`` option.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from wsterm.settings import Settings

__all__ = ["get_logger", "configure_logging", "resolve_level"]


def resolve_level(name: str | None) -> int:
    """Map a level name to a stdlib logging level, falling back to WARNING."""
    if not name:
        return logging.WARNING
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(settings: Settings | None = None, *, level: str | None = None) -> None:
    """Configure structlog for wsterm.

    Call once at application startup.

    Args:
        settings: Settings instance (will be created if None)
        level: Explicit level name taking precedence over settings.log_level
    """
    if settings is None:
        from wsterm.settings import Settings

        settings = Settings()

    log_level = resolve_level(level or settings.log_level)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)

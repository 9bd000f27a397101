# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for envelope-http."""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "envelope_http"
LOG_LEVEL_ENV = "ENVELOPE_HTTP_LOG_LEVEL"


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name (or ENVELOPE_HTTP_LOG_LEVEL, default WARNING) to a logging constant."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """
    Configure standard logging for CLI/library use.

    The package logger level is always applied, so a later call can raise
    verbosity even when the root handler was already configured.
    """
    effective_level = resolve_log_level(level)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)


__all__ = ["resolve_log_level", "setup_logging"]

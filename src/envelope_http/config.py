# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for envelope-http."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"envelope-http/{__version__}"
DEFAULT_TIMEOUT_MS = 10000


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _positive_int_env(name: str, default: int) -> int:
    value = _int_env(name, default)
    return value if value > 0 else default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    base_url: str = ""
    read_timeout_ms: int = DEFAULT_TIMEOUT_MS
    connect_timeout_ms: int = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT
    log_requests: bool = False

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            base_url=os.getenv("ENVELOPE_HTTP_BASE_URL", cls.base_url),
            read_timeout_ms=_positive_int_env("ENVELOPE_HTTP_READ_TIMEOUT_MS", cls.read_timeout_ms),
            connect_timeout_ms=_positive_int_env("ENVELOPE_HTTP_CONNECT_TIMEOUT_MS", cls.connect_timeout_ms),
            user_agent=os.getenv("ENVELOPE_HTTP_USER_AGENT", cls.user_agent),
            log_requests=_bool_env("ENVELOPE_HTTP_LOG_REQUESTS", cls.log_requests),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()

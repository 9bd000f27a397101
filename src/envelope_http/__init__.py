# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
envelope-http package entrypoint.

An asyncio HTTP client that decodes a uniform `{code, message, data}` envelope
from every response, threads requests and responses through ordered interceptor
chains, and normalizes every failure into HttpError. The network transport is
abstracted behind an injectable protocol with an httpx-backed default.
"""

from .config import HttpSettings, load_http_settings
from .errors import ErrorCategory, HttpCancelError, HttpError
from .http import (
    ApiResult,
    HttpClient,
    HttpMethod,
    HttpxTransport,
    LoggingInterceptor,
    RequestConfig,
    StubTransport,
    create_default_http_client,
)
from .log import setup_logging
from .utils.context import client_context, get_http_client
from .version import __version__

__all__ = [
    "ApiResult",
    "ErrorCategory",
    "HttpCancelError",
    "HttpClient",
    "HttpError",
    "HttpMethod",
    "HttpSettings",
    "HttpxTransport",
    "LoggingInterceptor",
    "RequestConfig",
    "StubTransport",
    "client_context",
    "create_default_http_client",
    "get_http_client",
    "load_http_settings",
    "setup_logging",
    "__version__",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    SSL_ERROR = "SSL_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    CANCELED = "CANCELED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class HttpError(Exception):
    """
    Failure raised by HttpClient for every request that does not yield an envelope.

    `code` is the transport status code when one exists, else -1. `response` carries
    the raw body (or structured payload) the transport returned, when available.
    """

    def __init__(
        self,
        message: str,
        code: int = -1,
        response: Any = None,
        *,
        category: ErrorCategory | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response
        self.category = category or ErrorCategory.UNKNOWN_ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "category": self.category.value,
            "response": self.response,
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class HttpCancelError(HttpError):
    """Caller-initiated abort; always code -1."""

    def __init__(self, message: str = "Request canceled"):
        super().__init__(message, -1, category=ErrorCategory.CANCELED)


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, HttpError):
        return exc.category

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def _exception_code(exc: BaseException) -> int:
    code = getattr(exc, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return -1


def create_http_error(exc: BaseException) -> HttpError:
    """Normalize any raised condition into an HttpError (HttpErrors pass through unchanged)."""
    if isinstance(exc, HttpError):
        return exc
    message = str(exc) or type(exc).__name__
    error = HttpError(message, _exception_code(exc), category=categorize_exception(exc))
    error.__cause__ = exc
    return error


__all__ = [
    "ErrorCategory",
    "HttpCancelError",
    "HttpError",
    "categorize_exception",
    "create_http_error",
]

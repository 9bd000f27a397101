# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request/response interceptor contracts and the ordered registry that holds them.

Request interceptors rewrite the outbound RequestConfig; response interceptors
transform decoded envelopes and observe failures. Hooks may be plain functions or
coroutines; the client awaits whatever they return when it is awaitable.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterator
from typing import Any, Generic, NoReturn, Protocol, TypeVar, Union

from ..errors import HttpError
from .models import ApiResult, RequestConfig

logger = logging.getLogger(__name__)

InterceptorT = TypeVar("InterceptorT")


class RequestInterceptor(Protocol):
    def on_request(self, config: RequestConfig) -> Union[RequestConfig, Awaitable[RequestConfig]]:
        """Return the (possibly new) config; returning None keeps the current one."""
        ...


class ResponseInterceptor(Protocol):
    def on_response(self, result: ApiResult[Any]) -> Union[ApiResult[Any], Awaitable[ApiResult[Any]]]:
        """Return the (possibly transformed) envelope; returning None keeps the current one."""
        ...

    def on_error(self, error: HttpError) -> Union[NoReturn, Awaitable[NoReturn]]:
        """Observe a normalized failure and raise it (or a replacement) again."""
        ...


class InterceptorRegistration(Generic[InterceptorT]):
    """Handle returned by registration; `remove` drops exactly this registration."""

    def __init__(self, registry: InterceptorRegistry[InterceptorT], interceptor: InterceptorT):
        self._registry = registry
        self.interceptor = interceptor

    @property
    def active(self) -> bool:
        return self._registry.contains(self)

    def remove(self) -> bool:
        return self._registry.remove(self)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"InterceptorRegistration({self.interceptor!r})"


class InterceptorRegistry(Generic[InterceptorT]):
    """
    Ordered interceptor sequence.

    Insertion order is invocation order and the same interceptor may be registered
    more than once. Iteration walks the live list, so a registration made while a
    request is in flight may or may not apply to that request.
    """

    def __init__(self):
        self._entries: list[InterceptorRegistration[InterceptorT]] = []

    def add(self, interceptor: InterceptorT) -> InterceptorRegistration[InterceptorT]:
        registration = InterceptorRegistration(self, interceptor)
        self._entries.append(registration)
        return registration

    def remove(self, registration: InterceptorRegistration[InterceptorT]) -> bool:
        for index, entry in enumerate(self._entries):
            if entry is registration:
                del self._entries[index]
                return True
        return False

    def contains(self, registration: InterceptorRegistration[InterceptorT]) -> bool:
        return any(entry is registration for entry in self._entries)

    def __iter__(self) -> Iterator[InterceptorT]:
        for entry in self._entries:
            yield entry.interceptor

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"InterceptorRegistry({self.to_list()!r})"

    def to_list(self) -> list[InterceptorT]:
        return [entry.interceptor for entry in self._entries]


class LoggingInterceptor:
    """Logs outbound requests, decoded envelopes and failures without altering them."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.DEBUG):
        self.log = log or logger
        self.level = level

    def on_request(self, config: RequestConfig) -> RequestConfig:
        self.log.log(
            self.level,
            "request %s %s params=%s",
            getattr(config.method, "value", config.method),
            config.url,
            config.params or {},
        )
        return config

    def on_response(self, result: ApiResult[Any]) -> ApiResult[Any]:
        self.log.log(self.level, "response code=%s message=%s", result.code, result.message)
        return result

    def on_error(self, error: HttpError) -> NoReturn:
        self.log.warning("request failed code=%s category=%s: %s", error.code, error.category.value, error.message)
        raise error


__all__ = [
    "InterceptorRegistration",
    "InterceptorRegistry",
    "LoggingInterceptor",
    "RequestInterceptor",
    "ResponseInterceptor",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction consumed by HttpClient."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .headers import Headers


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, value: HttpMethod | str | None) -> HttpMethod:
        """Accept enum members or (case-insensitive) method names; None means GET."""
        if value is None:
            return cls.GET
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


@dataclass
class TransportOptions:
    """Per-request options handed to a TransportHandle."""

    method: HttpMethod = HttpMethod.GET
    headers: Headers = field(default_factory=dict)
    body: str | bytes | None = None
    read_timeout_ms: int | None = None
    connect_timeout_ms: int | None = None


@dataclass
class TransportResponse:
    """Status code plus the body as delivered by the transport (text or structured)."""

    status_code: int
    result: Any = None


class TransportHandle(Protocol):
    """A single-use request handle; `close` must be safe to call on every exit path."""

    async def request(self, url: str, options: TransportOptions) -> TransportResponse: ...

    def close(self) -> None: ...


class Transport(Protocol):
    """Minimal protocol for acquiring request handles."""

    def create_handle(self) -> TransportHandle: ...

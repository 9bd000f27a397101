# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import httpx

from ..config import DEFAULT_TIMEOUT_MS, HttpSettings, load_http_settings
from ..errors import HttpError
from .headers import header_value
from .transport import Transport, TransportHandle, TransportOptions, TransportResponse


def _seconds(value_ms: int | None, default_ms: int) -> float:
    return (value_ms or default_ms) / 1000.0


def _decode_body(resp: httpx.Response) -> str | bytes:
    """Strictly decode the body; undecodable content is returned as raw bytes."""
    content = resp.content
    try:
        return content.decode(resp.encoding or "utf-8")
    except LookupError:
        pass
    except UnicodeDecodeError:
        return content
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content


class HttpxRequestHandle(TransportHandle):
    """
    Single-use handle owning a short-lived httpx.AsyncClient.

    The AsyncClient only lives for the duration of `request`; `close` marks the
    handle released so it cannot be reused.
    """

    def __init__(self, settings: HttpSettings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport
        self.closed = False

    async def request(self, url: str, options: TransportOptions) -> TransportResponse:
        if self.closed:
            raise HttpError("Transport handle already released")

        headers = dict(options.headers or {})
        if not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        read_timeout = _seconds(options.read_timeout_ms or self.settings.read_timeout_ms, DEFAULT_TIMEOUT_MS)
        connect_timeout = _seconds(options.connect_timeout_ms or self.settings.connect_timeout_ms, DEFAULT_TIMEOUT_MS)
        timeout = httpx.Timeout(read_timeout, connect=connect_timeout)

        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            resp = await client.request(
                options.method.value,
                url,
                headers=headers,
                content=options.body,
            )

        return TransportResponse(status_code=resp.status_code, result=_decode_body(resp))

    def close(self) -> None:
        self.closed = True


class HttpxTransport(Transport):
    """Hands out one HttpxRequestHandle per request."""

    def __init__(self, settings: HttpSettings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or load_http_settings()
        self._transport = transport

    def create_handle(self) -> HttpxRequestHandle:
        return HttpxRequestHandle(self.settings, self._transport)

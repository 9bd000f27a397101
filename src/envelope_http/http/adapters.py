# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process Transport implementations."""

from __future__ import annotations

import inspect
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from .transport import Transport, TransportHandle, TransportOptions, TransportResponse

StubReply = Union[TransportResponse, BaseException, Callable[[str, TransportOptions], Any]]


@dataclass
class RecordedRequest:
    url: str
    options: TransportOptions


def envelope_response(data: Any = None, *, code: int = 0, message: str = "ok", status_code: int = 200) -> TransportResponse:
    """Build a TransportResponse whose body is a JSON envelope."""
    return TransportResponse(
        status_code=status_code,
        result=json.dumps({"code": code, "message": message, "data": data}),
    )


class StubHandle(TransportHandle):
    def __init__(self, transport: StubTransport):
        self._transport = transport
        self.closed = False

    async def request(self, url: str, options: TransportOptions) -> TransportResponse:
        return await self._transport.dispatch(url, options)

    def close(self) -> None:
        self.closed = True


class StubTransport(Transport):
    """
    Deterministic, programmable Transport for tests.

    Replies are registered per URL (exact match after query construction) and may be a
    TransportResponse, an exception to raise, or a callable producing either. Unmatched
    URLs fall back to `default`, or raise ConnectionError when no default is set.
    """

    def __init__(self, responses: dict[str, StubReply] | None = None, default: StubReply | None = None):
        self._responses: dict[str, StubReply] = dict(responses or {})
        self.default = default
        self.requests: list[RecordedRequest] = []
        self.handles: list[StubHandle] = []

    def add(self, url: str, reply: StubReply) -> None:
        self._responses[url] = reply

    def create_handle(self) -> StubHandle:
        handle = StubHandle(self)
        self.handles.append(handle)
        return handle

    async def dispatch(self, url: str, options: TransportOptions) -> TransportResponse:
        self.requests.append(RecordedRequest(url=url, options=options))
        reply = self._responses.get(url, self.default)
        if reply is None:
            raise ConnectionError(f"No stubbed response configured for {url}")
        if callable(reply) and not isinstance(reply, BaseException):
            reply = reply(url, options)
            if inspect.isawaitable(reply):
                reply = await reply
        if isinstance(reply, BaseException):
            raise reply
        return reply

    @property
    def open_handles(self) -> int:
        return sum(1 for handle in self.handles if not handle.closed)


__all__ = ["RecordedRequest", "StubHandle", "StubTransport", "envelope_response"]

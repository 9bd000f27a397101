# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request configuration and response envelope models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from .headers import Headers
from .transport import HttpMethod

T = TypeVar("T")

ParamValue = Union[str, int, float, bool, None]
Params = dict[str, ParamValue]

ENVELOPE_FIELDS = ("code", "message", "data")


@dataclass
class RequestConfig:
    """
    Outbound request configuration as seen by request interceptors.

    - `url` may be absolute (`scheme://...`) or relative to the client's base URL.
    - `params` only ever contributes to the query string, never to the body.
    - `body` mappings, lists and dataclasses are JSON-encoded; `str`/`bytes` pass through.
    - `response_type` optionally coerces the envelope's `data` field.
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Headers = field(default_factory=dict)
    params: Params | None = None
    body: Any = None
    read_timeout_ms: int | None = None
    connect_timeout_ms: int | None = None
    response_type: Callable[[Any], Any] | None = None

    def copy(self) -> RequestConfig:
        """
        Return a copy whose headers, params and structured (dict/list) body can be
        mutated independently of the original.
        """
        return RequestConfig(
            url=self.url,
            method=self.method,
            headers=dict(self.headers or {}),
            params=dict(self.params) if self.params is not None else None,
            body=deepcopy(self.body) if isinstance(self.body, (dict, list)) else self.body,
            read_timeout_ms=self.read_timeout_ms,
            connect_timeout_ms=self.connect_timeout_ms,
            response_type=self.response_type,
        )


class EnvelopeShapeError(ValueError):
    """Raised when a decoded body does not carry the `{code, message, data}` fields."""


@dataclass
class ApiResult(Generic[T]):
    """Uniform `{code, message, data}` envelope returned by every successful call."""

    code: int
    message: str
    data: T

    @classmethod
    def from_mapping(cls, payload: Any) -> ApiResult[Any]:
        """
        Validate a decoded JSON value and build the envelope from it.

        `code` must be an integer; integral floats such as `200.0` are accepted and
        converted, booleans and fractional numbers are rejected.
        """
        if not isinstance(payload, Mapping):
            raise EnvelopeShapeError(f"expected a JSON object, got {type(payload).__name__}")
        missing = [name for name in ENVELOPE_FIELDS if name not in payload]
        if missing:
            raise EnvelopeShapeError(f"missing field(s): {', '.join(missing)}")
        code = payload["code"]
        message = payload["message"]
        if isinstance(code, float) and code.is_integer():
            code = int(code)
        if isinstance(code, bool) or not isinstance(code, int):
            raise EnvelopeShapeError("'code' must be an integer")
        if not isinstance(message, str):
            raise EnvelopeShapeError("'message' must be a string")
        return cls(code=code, message=message, data=payload["data"])

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": self.data}


__all__ = [
    "ApiResult",
    "EnvelopeShapeError",
    "ParamValue",
    "Params",
    "RequestConfig",
]

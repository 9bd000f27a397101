# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Envelope-decoding HTTP client with request/response interceptor chains."""

from __future__ import annotations

import dataclasses
import inspect
import json
import logging
from collections.abc import Mapping
from typing import Any, NoReturn

from ..config import DEFAULT_TIMEOUT_MS, HttpSettings, load_http_settings
from ..errors import ErrorCategory, HttpError, create_http_error
from .headers import Headers, merge_headers
from .interceptors import (
    InterceptorRegistration,
    InterceptorRegistry,
    LoggingInterceptor,
    RequestInterceptor,
    ResponseInterceptor,
)
from .models import ApiResult, EnvelopeShapeError, Params, RequestConfig
from .transport import HttpMethod, Transport, TransportHandle, TransportOptions, TransportResponse
from .url import build_url

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Headers = {"Content-Type": "application/json"}


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not JSON.
    raise ValueError(f"invalid JSON constant {name!r}")


def _shorthand_options(options: dict[str, Any]) -> dict[str, Any]:
    options.pop("method", None)
    return options


class HttpClient:
    """
    Issues GET/POST/PUT/DELETE requests against a base URL and decodes the
    `{code, message, data}` envelope from every response.

    Every failure surfaces as an HttpError raised through the response
    interceptors' `on_error` hooks.
    """

    def __init__(
        self,
        transport: Transport,
        base_url: str = "",
        headers: Mapping[str, str] | None = None,
        *,
        settings: HttpSettings | None = None,
    ):
        self.transport = transport
        self.settings = settings or HttpSettings()
        self.base_url = base_url
        self.default_headers: Headers = merge_headers(DEFAULT_HEADERS, headers)
        self.request_interceptors: InterceptorRegistry[RequestInterceptor] = InterceptorRegistry()
        self.response_interceptors: InterceptorRegistry[ResponseInterceptor] = InterceptorRegistry()

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> InterceptorRegistration[RequestInterceptor]:
        return self.request_interceptors.add(interceptor)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> InterceptorRegistration[ResponseInterceptor]:
        return self.response_interceptors.add(interceptor)

    async def get(self, url: str, params: Params | None = None, **options: Any) -> ApiResult[Any]:
        """
        Shorthand for `request` with a fixed method.

        `options` are RequestConfig fields; a `method` in `options` is ignored,
        and unknown keywords raise TypeError before any request is made.
        """
        return await self.request(RequestConfig(url=url, params=params, method=HttpMethod.GET, **_shorthand_options(options)))

    async def post(self, url: str, body: Any = None, **options: Any) -> ApiResult[Any]:
        return await self.request(RequestConfig(url=url, body=body, method=HttpMethod.POST, **_shorthand_options(options)))

    async def put(self, url: str, body: Any = None, **options: Any) -> ApiResult[Any]:
        return await self.request(RequestConfig(url=url, body=body, method=HttpMethod.PUT, **_shorthand_options(options)))

    async def delete(self, url: str, **options: Any) -> ApiResult[Any]:
        return await self.request(RequestConfig(url=url, method=HttpMethod.DELETE, **_shorthand_options(options)))

    async def request(self, config: RequestConfig) -> ApiResult[Any]:
        handle: TransportHandle | None = None
        try:
            try:
                handle = self.transport.create_handle()
                processed = await self._apply_request_interceptors(config.copy())
                url = self.build_url(processed.url, processed.params)
                response = await handle.request(url, self.build_transport_options(processed))
                result = self.handle_response(response, processed)
                return await self._apply_response_interceptors(result)
            except Exception as exc:
                error = create_http_error(exc)
                logger.debug("Request to %s failed: %s (code=%s)", config.url, error.message, error.code)
                await self._apply_response_error_interceptors(error)
        finally:
            if handle is not None:
                handle.close()

    def build_url(self, url: str, params: Params | None = None) -> str:
        return build_url(self.base_url, url, params)

    def build_headers(self, headers: Mapping[str, str] | None) -> Headers:
        return merge_headers(self.default_headers, headers)

    def build_transport_options(self, config: RequestConfig) -> TransportOptions:
        return TransportOptions(
            method=HttpMethod.coerce(config.method),
            headers=self.build_headers(config.headers),
            body=serialize_body(config.body),
            read_timeout_ms=config.read_timeout_ms or self.settings.read_timeout_ms or DEFAULT_TIMEOUT_MS,
            connect_timeout_ms=config.connect_timeout_ms or self.settings.connect_timeout_ms or DEFAULT_TIMEOUT_MS,
        )

    def handle_response(self, response: TransportResponse, config: RequestConfig | None = None) -> ApiResult[Any]:
        status = response.status_code
        raw = response.result
        if status is None or status < 200 or status >= 300:
            raise HttpError(
                f"Request failed with status code {status}",
                status if status is not None else -1,
                raw,
                category=ErrorCategory.HTTP_STATUS,
            )
        if not isinstance(raw, str):
            raise HttpError(
                "Invalid response format, expected a string.",
                status,
                raw,
                category=ErrorCategory.INVALID_RESPONSE,
            )
        try:
            payload = json.loads(raw, parse_constant=_reject_constant)
        except ValueError:
            raise HttpError(
                "Failed to parse JSON response.",
                status,
                raw,
                category=ErrorCategory.INVALID_RESPONSE,
            ) from None
        try:
            result = ApiResult.from_mapping(payload)
        except EnvelopeShapeError as exc:
            raise HttpError(
                "Invalid response envelope, expected {code, message, data}.",
                status,
                raw,
                category=ErrorCategory.INVALID_RESPONSE,
            ) from exc

        response_type = config.response_type if config is not None else None
        if response_type is not None:
            try:
                result.data = response_type(result.data)
            except Exception as exc:
                raise HttpError(
                    "Failed to coerce response data.",
                    status,
                    raw,
                    category=ErrorCategory.INVALID_RESPONSE,
                ) from exc
        return result

    async def _apply_request_interceptors(self, config: RequestConfig) -> RequestConfig:
        processed = config
        for interceptor in self.request_interceptors:
            updated = await _resolve(interceptor.on_request(processed))
            if updated is not None:
                processed = updated
        return processed

    async def _apply_response_interceptors(self, result: ApiResult[Any]) -> ApiResult[Any]:
        processed = result
        for interceptor in self.response_interceptors:
            updated = await _resolve(interceptor.on_response(processed))
            if updated is not None:
                processed = updated
        return processed

    async def _apply_response_error_interceptors(self, error: HttpError) -> NoReturn:
        # Every interceptor sees the original error; the last one to run decides what is raised.
        pending: HttpError = error
        for interceptor in self.response_interceptors:
            try:
                outcome = await _resolve(interceptor.on_error(error))
            except Exception as exc:
                pending = create_http_error(exc)
            else:
                if isinstance(outcome, BaseException):
                    pending = create_http_error(outcome)
        raise pending


def serialize_body(body: Any) -> str | bytes | None:
    """JSON-encode structured bodies; text and binary bodies pass through unchanged."""
    if body is None or isinstance(body, (str, bytes)):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        body = dataclasses.asdict(body)
    elif isinstance(body, Mapping) and not isinstance(body, dict):
        body = dict(body)
    return json.dumps(body)


def create_default_http_client(
    settings: HttpSettings | None = None,
    headers: Mapping[str, str] | None = None,
) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_transport import HttpxTransport

    settings = settings or load_http_settings()
    client = HttpClient(HttpxTransport(settings), settings.base_url, headers, settings=settings)
    if settings.log_requests:
        logging_interceptor = LoggingInterceptor()
        client.add_request_interceptor(logging_interceptor)
        client.add_response_interceptor(logging_interceptor)
    return client


__all__ = ["DEFAULT_HEADERS", "HttpClient", "create_default_http_client", "serialize_body"]

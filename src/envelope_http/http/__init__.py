# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import RecordedRequest, StubTransport, envelope_response
from .client import DEFAULT_HEADERS, HttpClient, create_default_http_client, serialize_body
from .headers import Headers, header_value, merge_headers
from .httpx_transport import HttpxTransport
from .interceptors import (
    InterceptorRegistration,
    InterceptorRegistry,
    LoggingInterceptor,
    RequestInterceptor,
    ResponseInterceptor,
)
from .models import ApiResult, Params, RequestConfig
from .transport import HttpMethod, Transport, TransportHandle, TransportOptions, TransportResponse
from .url import build_query_string, build_url

__all__ = [
    "DEFAULT_HEADERS",
    "ApiResult",
    "Headers",
    "HttpClient",
    "HttpMethod",
    "HttpxTransport",
    "InterceptorRegistration",
    "InterceptorRegistry",
    "LoggingInterceptor",
    "Params",
    "RecordedRequest",
    "RequestConfig",
    "RequestInterceptor",
    "ResponseInterceptor",
    "StubTransport",
    "Transport",
    "TransportHandle",
    "TransportOptions",
    "TransportResponse",
    "build_query_string",
    "build_url",
    "create_default_http_client",
    "envelope_response",
    "header_value",
    "merge_headers",
    "serialize_body",
]

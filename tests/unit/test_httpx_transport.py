# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import httpx
import pytest

from envelope_http.config import HttpSettings
from envelope_http.errors import ErrorCategory, HttpError
from envelope_http.http.client import HttpClient, create_default_http_client
from envelope_http.http.httpx_transport import HttpxTransport
from envelope_http.http.models import ApiResult
from envelope_http.http.transport import HttpMethod, TransportOptions


def make_client(handler, settings=None):
    transport = HttpxTransport(settings or HttpSettings(user_agent="UA/1.0"), transport=httpx.MockTransport(handler))
    return HttpClient(transport, "http://h:8060")


def test_httpx_transport_sends_request_and_decodes_envelope():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json={"code": 0, "message": "created", "data": {"id": 9}})

    client = make_client(handler)
    result = asyncio.run(
        client.post("/items", {"name": "x"}, headers={"X-Req": "1"}, read_timeout_ms=500, connect_timeout_ms=2000)
    )

    assert result == ApiResult(code=0, message="created", data={"id": 9})
    request = captured["request"]
    assert request.method == "POST"
    assert str(request.url) == "http://h:8060/items"
    assert request.headers["user-agent"] == "UA/1.0"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["x-req"] == "1"
    assert request.content == b'{"name": "x"}'
    assert request.extensions["timeout"] == {"connect": 2.0, "read": 0.5, "write": 0.5, "pool": 0.5}


def test_httpx_transport_keeps_caller_user_agent_and_query():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, text='{"code": 0, "message": "ok", "data": []}')

    client = make_client(handler)
    asyncio.run(client.get("/search", {"q": "a b"}, headers={"user-agent": "Mine/2"}))

    request = captured["request"]
    assert str(request.url) == "http://h:8060/search?q=a%20b"
    assert request.headers["user-agent"] == "Mine/2"


def test_httpx_transport_status_failure():
    client = make_client(lambda request: httpx.Response(404, text="not found"))

    with pytest.raises(HttpError) as excinfo:
        asyncio.run(client.delete("/gone"))

    assert excinfo.value.code == 404
    assert excinfo.value.response == "not found"


@pytest.mark.parametrize(
    ("exc", "category"),
    [
        (httpx.ConnectError("refused"), ErrorCategory.CONNECTION_ERROR),
        (httpx.ReadTimeout("too slow"), ErrorCategory.TIMEOUT),
    ],
)
def test_httpx_transport_exceptions_are_normalized(exc, category):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    client = make_client(handler)

    with pytest.raises(HttpError) as excinfo:
        asyncio.run(client.get("/down"))

    assert excinfo.value.code == -1
    assert excinfo.value.category is category
    assert excinfo.value.message == str(exc)


def test_httpx_transport_rejects_body_that_is_not_valid_utf8():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"code":0,"message":"ok","data":"\xff\xfe"}')

    client = make_client(handler)

    with pytest.raises(HttpError) as excinfo:
        asyncio.run(client.get("/garbled"))

    assert excinfo.value.message == "Invalid response format, expected a string."
    assert excinfo.value.category is ErrorCategory.INVALID_RESPONSE
    assert excinfo.value.response == b'{"code":0,"message":"ok","data":"\xff\xfe"}'


def test_httpx_transport_decodes_declared_charset():
    def handler(request: httpx.Request) -> httpx.Response:
        body = '{"code":0,"message":"caf\u00e9","data":null}'.encode("latin-1")
        return httpx.Response(200, content=body, headers={"Content-Type": "application/json; charset=latin-1"})

    result = asyncio.run(make_client(handler).get("/latin"))

    assert result.message == "caf\u00e9"


def test_released_handle_cannot_be_reused():
    transport = HttpxTransport(HttpSettings(), transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    handle = transport.create_handle()
    handle.close()

    with pytest.raises(HttpError, match="already released"):
        asyncio.run(handle.request("http://h/x", TransportOptions(method=HttpMethod.GET)))


def test_create_default_http_client_uses_settings():
    settings = HttpSettings(base_url="http://h:8060", log_requests=True)
    client = create_default_http_client(settings, headers={"Authorization": "Bearer t"})

    assert isinstance(client.transport, HttpxTransport)
    assert client.base_url == "http://h:8060"
    assert client.default_headers == {"Content-Type": "application/json", "Authorization": "Bearer t"}
    assert len(client.request_interceptors) == 1
    assert len(client.response_interceptors) == 1

    quiet = create_default_http_client(HttpSettings())
    assert len(quiet.request_interceptors) == 0

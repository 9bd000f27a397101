# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json

import pytest

from envelope_http.cli import main as cli_main
from envelope_http.cli.main import build_parser, build_request
from envelope_http.config import HttpSettings
from envelope_http.http.adapters import StubTransport, envelope_response
from envelope_http.http.client import HttpClient
from envelope_http.http.transport import HttpMethod, TransportResponse
from envelope_http.utils.context import client_context, get_client_context, get_http_client, get_http_settings


def test_build_parser_and_request():
    parser = build_parser()
    args = parser.parse_args(
        ["post", "/items", "--param", "a=1", "--param", "b=x=y", "--header", "X-Req: 1", "--data", '{"k": 1}']
    )
    config = build_request(args)

    assert config.method is HttpMethod.POST
    assert config.url == "/items"
    assert config.params == {"a": "1", "b": "x=y"}
    assert config.headers == {"X-Req": "1"}
    assert config.body == '{"k": 1}'


def test_build_parser_rejects_unknown_method():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["PATCH", "/x"])


def test_cli_rejects_malformed_param(capsys):
    with pytest.raises(SystemExit):
        cli_main.main(["GET", "/x", "--param", "novalue"])
    assert "--param expects NAME=VALUE" in capsys.readouterr().err


def _stub_factory(transport, captured):
    def factory(settings: HttpSettings, headers=None):
        captured["settings"] = settings
        return HttpClient(transport, settings.base_url, headers, settings=settings)

    return factory


def test_cli_main_prints_envelope(monkeypatch, capsys):
    transport = StubTransport()
    transport.add("http://h:8060/users?id=1", envelope_response({"id": 1}))
    captured = {}
    monkeypatch.setattr(cli_main, "create_default_http_client", _stub_factory(transport, captured))

    exit_code = cli_main.main(["get", "/users", "--base-url", "http://h:8060", "--param", "id=1"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"code": 0, "message": "ok", "data": {"id": 1}}
    assert captured["settings"].base_url == "http://h:8060"


def test_cli_main_reports_errors(monkeypatch, capsys):
    transport = StubTransport(default=TransportResponse(404, "not found"))
    monkeypatch.setattr(cli_main, "create_default_http_client", _stub_factory(transport, {}))

    exit_code = cli_main.main(["DELETE", "http://h:8060/users/1"])

    assert exit_code == 1
    error = json.loads(capsys.readouterr().err)
    assert error == {
        "message": "Request failed with status code 404",
        "code": 404,
        "category": "HTTP_STATUS",
        "response": "not found",
    }


def test_cli_truncates_large_error_bodies(monkeypatch, capsys):
    transport = StubTransport(default=TransportResponse(500, "x" * 10000))
    monkeypatch.setattr(cli_main, "create_default_http_client", _stub_factory(transport, {}))

    assert cli_main.main(["GET", "http://h/x"]) == 1
    error = json.loads(capsys.readouterr().err)
    assert error["response"].endswith("...[truncated]")
    assert len(error["response"].encode("utf-8")) == cli_main.CLI_TEXT_TRUNCATION_BYTES


def test_cli_verbose_enables_request_logging(monkeypatch, capsys):
    transport = StubTransport(default=envelope_response())
    captured = {}
    monkeypatch.setattr(cli_main, "create_default_http_client", _stub_factory(transport, captured))

    assert cli_main.main(["GET", "http://h/x", "--verbose"]) == 0
    assert captured["settings"].log_requests is True


def test_client_context_scopes_the_ambient_client():
    client = HttpClient(StubTransport(default=envelope_response("ctx")), "http://h")
    settings = HttpSettings(base_url="http://h")

    with pytest.raises(RuntimeError):
        get_http_client()

    with client_context(http_client=client, http_settings=settings):
        assert get_http_client() is client
        assert get_http_settings() is settings
        with client_context(http_client=None):
            assert get_http_client() is client
        result = asyncio.run(get_http_client().get("/x"))

    assert result.data == "ctx"
    assert get_client_context().http_client is None
    assert isinstance(get_http_settings(), HttpSettings)

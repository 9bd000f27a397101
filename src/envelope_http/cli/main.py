# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envelope-http CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import HttpError
from ..http import HttpClient, HttpMethod, RequestConfig, create_default_http_client
from ..log import setup_logging

CLI_TEXT_TRUNCATION_BYTES = 4096


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue a request and print the decoded {code, message, data} envelope")
    parser.add_argument("method", type=str.upper, choices=[m.value for m in HttpMethod], help="HTTP method")
    parser.add_argument("url", help="Absolute URL, or a path relative to --base-url")
    parser.add_argument("--base-url", default=None, help="Base URL prefixed to relative paths")
    parser.add_argument("--param", action="append", default=[], metavar="KEY=VALUE", help="Query parameter (repeatable)")
    parser.add_argument("--header", action="append", default=[], metavar="NAME:VALUE", help="Request header (repeatable)")
    parser.add_argument("--data", default=None, help="Request body; JSON is sent as-is")
    parser.add_argument("--read-timeout-ms", type=int, default=None)
    parser.add_argument("--connect-timeout-ms", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log requests and responses")
    return parser


def _parse_pairs(values: list[str], separator: str, option: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition(separator)
        if not sep or not key.strip():
            raise ValueError(f"{option} expects NAME{separator}VALUE, got {raw!r}")
        pairs[key.strip()] = value.strip() if separator == ":" else value
    return pairs


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix[:max_bytes]
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _print_json(data: Any, stream=None) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    if isinstance(payload, dict) and isinstance(payload.get("response"), str):
        payload["response"] = _truncate_text_bytes(payload["response"], CLI_TEXT_TRUNCATION_BYTES)
    out = stream or sys.stdout
    json.dump(payload, out, indent=2, sort_keys=True, default=str)
    out.write("\n")


def build_request(args: argparse.Namespace) -> RequestConfig:
    return RequestConfig(
        url=args.url,
        method=HttpMethod(args.method),
        headers=_parse_pairs(args.header, ":", "--header"),
        params=_parse_pairs(args.param, "=", "--param") or None,
        body=args.data,
        read_timeout_ms=args.read_timeout_ms,
        connect_timeout_ms=args.connect_timeout_ms,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    settings: HttpSettings = load_http_settings()
    if args.base_url is not None:
        settings.base_url = args.base_url
    if args.verbose:
        settings.log_requests = True

    try:
        config = build_request(args)
    except ValueError as exc:
        parser.error(str(exc))

    client: HttpClient = create_default_http_client(settings)
    try:
        result = asyncio.run(client.request(config))
    except HttpError as exc:
        _print_json(exc, stream=sys.stderr)
        return 1

    _print_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

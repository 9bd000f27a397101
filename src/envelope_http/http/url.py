# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers used to build request targets."""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote

from .models import ParamValue

_ABSOLUTE_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

# Characters left unescaped by JavaScript's encodeURIComponent.
_COMPONENT_SAFE = "-_.!~*'()"


def is_absolute_url(url: str) -> bool:
    """Return True when `url` starts with a `scheme://` prefix."""
    return bool(_ABSOLUTE_URL_RE.match(url or ""))


def encode_component(value: ParamValue) -> str:
    """Percent-encode a query key or value."""
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return quote(text, safe=_COMPONENT_SAFE)


def build_query_string(params: Mapping[str, ParamValue] | None) -> str:
    """Return `k=v&k=v` for `params`, or an empty string when there is nothing to encode."""
    if not params:
        return ""
    return "&".join(f"{encode_component(key)}={encode_component(value)}" for key, value in params.items())


def build_url(base_url: str, url: str, params: Mapping[str, ParamValue] | None = None) -> str:
    """
    Resolve `url` against `base_url` and append `params` as a query string.

    Absolute URLs are used verbatim; anything else is prefixed with `base_url`
    by plain concatenation.

    Example:
      build_url("http://h:8060", "/users", {"id": 1}) -> http://h:8060/users?id=1
    """
    full_url = url if is_absolute_url(url) else f"{base_url or ''}{url or ''}"
    query = build_query_string(params)
    if not query:
        return full_url
    separator = "&" if "?" in full_url else "?"
    return f"{full_url}{separator}{query}"


__all__ = ["build_query_string", "build_url", "encode_component", "is_absolute_url"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header utilities.

HTTP header field names are case-insensitive (RFC 9110). Headers are stored as plain
dicts that keep the caller's casing, so overrides and lookups match names ignoring case.
"""

from __future__ import annotations

from collections.abc import Mapping

Headers = dict[str, str]


def merge_headers(*layers: Mapping[str, str] | None) -> Headers:
    """
    Merge header mappings left to right; later layers win on (case-insensitive) collision.

    The casing of the winning layer is kept.
    """
    merged: Headers = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if key is None:
                continue
            name = str(key)
            lower = name.lower()
            for existing in [k for k in merged if k.lower() == lower]:
                del merged[existing]
            merged[name] = "" if value is None else str(value)
    return merged


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    if name in headers:
        value = headers.get(name)
        return default if value is None else str(value).strip()

    lower = name.lower()
    for key, value in headers.items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = ["Headers", "header_value", "merge_headers"]

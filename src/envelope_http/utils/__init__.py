# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared helpers."""

from .context import ClientContext, client_context, get_client_context, get_http_client, get_http_settings

__all__ = [
    "ClientContext",
    "client_context",
    "get_client_context",
    "get_http_client",
    "get_http_settings",
]

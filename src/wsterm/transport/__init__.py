# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer for remote terminal connections."""

from __future__ import annotations

from wsterm.transport.base import ConnectionTransport
from wsterm.transport.chaos import ChaosTransport
from wsterm.transport.websocket import WebSocketTransport, bearer_headers, parse_endpoint

__all__ = ["ChaosTransport", "ConnectionTransport", "WebSocketTransport", "bearer_headers", "parse_endpoint"]

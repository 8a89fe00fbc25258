# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for wsterm."""

from __future__ import annotations

# Default endpoint shown to the user before they edit it
DEFAULT_SERVER_URL = "ws://HOST:7070/ws"

# Output retention (characters)
DEFAULT_OUTPUT_LIMIT = 200_000

# Outbound line terminator
LINE_TERMINATOR = "\n"

# Inbound binary frames
TEXT_ENCODING = "utf-8"

# WebSocket close code 1001 "going away"
CLOSE_GOING_AWAY = 1001

# Default timeouts
DEFAULT_OPEN_TIMEOUT_S = 10.0
DEFAULT_PING_INTERVAL_S = 20.0

# Status messages
STATUS_CONNECTED = "Connected"
STATUS_DISCONNECTED = "Disconnected"
STATUS_INVALID_URL = "Invalid URL"
STATUS_SEND_ERROR = "Send error"
STATUS_RECEIVE_ERROR = "Receive error"
STATUS_CONNECT_ERROR = "Connect error"

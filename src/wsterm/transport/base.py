# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base class for message transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from wsterm.constants import CLOSE_GOING_AWAY


class ConnectionTransport(ABC):
    """Abstract base for full-duplex message transports (WebSocket, test doubles)."""

    @abstractmethod
    async def connect(self, url: str, headers: dict[str, str] | None = None, **kwargs: Any) -> None:
        """Open the connection and complete the handshake.

        Args:
            url: Endpoint URI, already validated
            headers: Extra handshake headers (e.g. Authorization)
            **kwargs: Transport-specific connection options

        Raises:
            ConnectionError: If the connection or handshake fails
        """

    @abstractmethod
    async def disconnect(self, code: int = CLOSE_GOING_AWAY) -> None:
        """Close the connection with ``code`` and release resources.

        Should be idempotent - safe to call multiple times.
        """

    @abstractmethod
    async def send(self, text: str) -> None:
        """Send one text frame.

        Raises:
            ConnectionError: If not connected or the send fails
        """

    @abstractmethod
    async def receive(self) -> str | bytes:
        """Wait for the next frame.

        Returns:
            ``str`` for text frames, ``bytes`` for binary frames

        Raises:
            ConnectionError: If not connected or the connection closed
        """

    @abstractmethod
    def is_connected(self) -> bool:
        """Return True while the connection is open."""

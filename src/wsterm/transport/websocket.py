# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""WebSocket transport built on the ``websockets`` asyncio client."""

from __future__ import annotations

from typing import Any

import structlog
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, InvalidURI, WebSocketException
from websockets.protocol import State
from websockets.uri import WebSocketURI, parse_uri

from wsterm.constants import CLOSE_GOING_AWAY, DEFAULT_OPEN_TIMEOUT_S, DEFAULT_PING_INTERVAL_S
from wsterm.errors import InvalidEndpointError, TransportClosedError
from wsterm.transport.base import ConnectionTransport

log = structlog.get_logger()


def parse_endpoint(url: str) -> WebSocketURI:
    """Validate a ws:// or wss:// endpoint.

    Raises:
        InvalidEndpointError: If ``url`` is not a usable WebSocket URI
    """
    try:
        return parse_uri(url)
    except (InvalidURI, ValueError) as e:
        raise InvalidEndpointError(f"Invalid endpoint {url!r}: {e}") from e


def bearer_headers(credential: str) -> dict[str, str]:
    """Handshake headers for an optional bearer credential."""
    if not credential:
        return {}
    return {"Authorization": f"Bearer {credential}"}


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class WebSocketTransport(ConnectionTransport):
    """WebSocket transport: text frames out, text or binary frames in."""

    def __init__(self) -> None:
        self._ws: ClientConnection | None = None

    async def connect(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT_S,
        ping_interval: float | None = DEFAULT_PING_INTERVAL_S,
        **kwargs: Any,
    ) -> None:
        """Open the WebSocket and complete the upgrade handshake.

        Args:
            url: Endpoint URI
            headers: Extra handshake headers
            open_timeout: Handshake timeout in seconds
            ping_interval: Protocol keepalive interval (None disables)
            **kwargs: Unused, for compatibility

        Raises:
            TransportClosedError: If the connection or handshake fails
        """
        if self._ws is not None:
            await self.disconnect()

        try:
            self._ws = await connect(
                url,
                additional_headers=headers or None,
                open_timeout=open_timeout,
                ping_interval=ping_interval,
            )
        except (WebSocketException, OSError, TimeoutError) as e:
            raise TransportClosedError(_describe(e)) from e

        log.info("websocket_connected", url=url, authorized="Authorization" in (headers or {}))

    async def disconnect(self, code: int = CLOSE_GOING_AWAY) -> None:
        """Close with ``code`` and no reason payload."""
        ws = self._ws
        if ws is None:
            return
        self._ws = None

        try:
            await ws.close(code=code, reason="")
        except (WebSocketException, OSError):
            pass

        log.info("websocket_disconnected", code=code)

    async def send(self, text: str) -> None:
        if self._ws is None:
            raise TransportClosedError("Not connected")

        try:
            await self._ws.send(text)
        except ConnectionClosed as e:
            raise TransportClosedError(_describe(e)) from e

    async def receive(self) -> str | bytes:
        if self._ws is None:
            raise TransportClosedError("Not connected")

        try:
            return await self._ws.recv()
        except ConnectionClosed as e:
            raise TransportClosedError(_describe(e)) from e

    def is_connected(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

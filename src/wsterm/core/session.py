# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Remote terminal session: connection lifecycle, send and receive paths."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from wsterm.constants import (
    CLOSE_GOING_AWAY,
    DEFAULT_OPEN_TIMEOUT_S,
    DEFAULT_OUTPUT_LIMIT,
    DEFAULT_PING_INTERVAL_S,
    LINE_TERMINATOR,
    STATUS_CONNECT_ERROR,
    STATUS_CONNECTED,
    STATUS_DISCONNECTED,
    STATUS_INVALID_URL,
    STATUS_RECEIVE_ERROR,
    STATUS_SEND_ERROR,
    TEXT_ENCODING,
)
from wsterm.core.output_buffer import OutputBuffer
from wsterm.errors import InvalidEndpointError
from wsterm.logging import get_logger
from wsterm.transport.base import ConnectionTransport
from wsterm.transport.websocket import WebSocketTransport, bearer_headers, parse_endpoint

logger = get_logger(__name__)


class SessionState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class SessionChange(BaseModel):
    """Published to watchers after every state transition or output append."""

    kind: Literal["state", "output"]
    state: SessionState
    connected: bool
    status: str
    text: str = ""


WatchCallback = Callable[[SessionChange], None]


class Session(BaseModel):
    """One remote terminal session and its bounded output log.

    All mutations happen on the event loop between awaits, so watchers never
    observe a half-applied transition. Every connection attempt gets a new
    generation number; continuations belonging to an older generation are
    dropped instead of touching live state.

    Failures never raise to the caller: they move the session back to
    ``DISCONNECTED`` and describe the cause in ``status``.
    """

    transport_factory: Callable[[], ConnectionTransport] = WebSocketTransport
    output_limit: int = Field(default=DEFAULT_OUTPUT_LIMIT, ge=1)
    open_timeout: float = Field(default=DEFAULT_OPEN_TIMEOUT_S, gt=0)
    ping_interval: float | None = DEFAULT_PING_INTERVAL_S

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _buffer: OutputBuffer = PrivateAttr()
    _state: SessionState = PrivateAttr(default=SessionState.DISCONNECTED)
    _status: str = PrivateAttr(default=STATUS_DISCONNECTED)
    _url: str = PrivateAttr(default="")
    _generation: int = PrivateAttr(default=0)

    # Live handle: present only while CONNECTING/CONNECTED.
    _transport: ConnectionTransport | None = PrivateAttr(default=None)
    _task: asyncio.Task[None] | None = PrivateAttr(default=None)
    _opened: asyncio.Future[bool] | None = PrivateAttr(default=None)

    _send_lock: asyncio.Lock = PrivateAttr(default_factory=asyncio.Lock)
    _closing: set[asyncio.Task[None]] = PrivateAttr(default_factory=set)
    _watchers: list[WatchCallback] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        self._buffer = OutputBuffer(max_chars=self.output_limit)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> str:
        return self._status

    @property
    def connected(self) -> bool:
        return self._state is SessionState.CONNECTED

    @property
    def url(self) -> str:
        return self._url

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def output_buffer(self) -> OutputBuffer:
        return self._buffer

    @property
    def output(self) -> str:
        return self._buffer.snapshot()

    def snapshot(self) -> str:
        """Return retained output without any I/O."""
        return self._buffer.snapshot()

    def has_transport(self) -> bool:
        return self._transport is not None

    def add_watch(self, callback: WatchCallback) -> None:
        self._watchers.append(callback)

    def remove_watch(self, callback: WatchCallback) -> None:
        if callback in self._watchers:
            self._watchers.remove(callback)

    def initiate(self, url: str, credential: str = "") -> None:
        """Validate ``url`` and start connecting.

        The session reports ``CONNECTED`` as soon as the open is issued; the
        handshake completes in the background. Must be called from a running
        event loop.
        """
        if self._transport is not None:
            logger.info("session_initiate_ignored", url=url, state=str(self._state))
            return

        try:
            parse_endpoint(url)
        except InvalidEndpointError as e:
            logger.warning("session_invalid_url", url=url, error=str(e))
            self._set_state(SessionState.DISCONNECTED, STATUS_INVALID_URL)
            return

        loop = asyncio.get_running_loop()

        self._generation += 1
        generation = self._generation
        self._state = SessionState.CONNECTING
        self._url = url
        transport = self.transport_factory()
        self._transport = transport
        self._opened = loop.create_future()
        self._task = loop.create_task(
            self._run(generation, transport, self._opened, url, bearer_headers(credential)),
            name=f"wsterm-session-{generation}",
        )
        logger.info("session_connecting", url=url, generation=generation, authorized=bool(credential))

        self._set_state(SessionState.CONNECTED, STATUS_CONNECTED)

    async def terminate(self) -> None:
        """Close the active connection, if any. Safe to call at any time."""
        if self._transport is None:
            logger.debug("session_terminate_noop", state=str(self._state))
            return

        logger.info("session_terminating", url=self._url, generation=self._generation)
        self._drop_handle()
        self._set_state(SessionState.DISCONNECTED, STATUS_DISCONNECTED)
        await self.wait_closed()

    async def submit_line(self, text: str) -> bool:
        """Send ``text`` as one newline-terminated frame."""
        return await self.send(text + LINE_TERMINATOR)

    async def send(self, text: str) -> bool:
        """Send one text frame on the current connection.

        Delivery is at-most-once: with no live handle, or if the handle is
        replaced while this call waits for the open, the frame is dropped and
        False is returned. Frames are written one at a time in call order.

        Returns:
            True if the transport accepted the frame
        """
        if self._transport is None:
            logger.debug("session_send_dropped", reason="not_connected", chars=len(text))
            return False

        generation = self._generation
        transport = self._transport
        opened = self._opened

        async with self._send_lock:
            if opened is not None and not await asyncio.shield(opened):
                logger.debug("session_send_dropped", reason="open_failed", generation=generation)
                return False
            if generation != self._generation:
                logger.debug("session_send_dropped", reason="superseded", generation=generation)
                return False

            try:
                await transport.send(text)
            except ConnectionError as e:
                self._fail(generation, f"{STATUS_SEND_ERROR}: {e}")
                return False

        logger.debug("session_send", chars=len(text), generation=generation)
        return True

    async def wait_closed(self) -> None:
        """Wait for transports that are still closing in the background."""
        current = asyncio.current_task()
        pending = [task for task in self._closing if task is not current]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def get_status(self) -> dict[str, Any]:
        return {
            "state": str(self._state),
            "connected": self.connected,
            "status": self._status,
            "url": self._url,
            "generation": self._generation,
            "output_chars": len(self._buffer),
            "output_limit": self._buffer.max_chars,
        }

    async def _run(
        self,
        generation: int,
        transport: ConnectionTransport,
        opened: asyncio.Future[bool],
        url: str,
        headers: dict[str, str],
    ) -> None:
        try:
            try:
                await transport.connect(
                    url,
                    headers,
                    open_timeout=self.open_timeout,
                    ping_interval=self.ping_interval,
                )
            except ConnectionError as e:
                _resolve(opened, False)
                self._fail(generation, f"{STATUS_CONNECT_ERROR}: {e}")
                return

            _resolve(opened, True)
            logger.info("session_open", url=url, generation=generation)

            while True:
                try:
                    message = await transport.receive()
                except ConnectionError as e:
                    self._fail(generation, f"{STATUS_RECEIVE_ERROR}: {e}")
                    return
                if generation != self._generation:
                    return
                self._append_output(message)
        except Exception as e:
            logger.exception("session_reader_crashed", generation=generation)
            was_open = opened.done() and opened.result()
            prefix = STATUS_RECEIVE_ERROR if was_open else STATUS_CONNECT_ERROR
            self._fail(generation, f"{prefix}: {e}")
        finally:
            _resolve(opened, False)
            await transport.disconnect(CLOSE_GOING_AWAY)

    def _append_output(self, message: str | bytes) -> None:
        if isinstance(message, bytes):
            text = message.decode(TEXT_ENCODING, errors="replace")
        else:
            text = message
        if not text:
            return
        self._buffer.append(text)
        self._emit("output", text)

    def _fail(self, generation: int, status: str) -> None:
        if generation != self._generation:
            logger.debug("session_stale_failure", generation=generation, current=self._generation, status=status)
            return
        logger.warning("session_failed", url=self._url, generation=generation, status=status)
        self._drop_handle()
        self._set_state(SessionState.DISCONNECTED, status)

    def _drop_handle(self) -> None:
        """Forget the live transport; its task finishes closing in the background."""
        self._generation += 1
        task = self._task
        opened = self._opened
        self._task = None
        self._opened = None
        self._transport = None

        if opened is not None:
            _resolve(opened, False)
        if task is not None and not task.done():
            if task is not asyncio.current_task():
                task.cancel()
            self._closing.add(task)
            task.add_done_callback(self._closing.discard)

    def _set_state(self, state: SessionState, status: str) -> None:
        self._state = state
        self._status = status
        self._emit("state")

    def _emit(self, kind: Literal["state", "output"], text: str = "") -> None:
        if not self._watchers:
            return
        change = SessionChange(
            kind=kind,
            state=self._state,
            connected=self.connected,
            status=self._status,
            text=text,
        )
        for callback in list(self._watchers):
            try:
                callback(change)
            except Exception:
                logger.exception("session_watch_failed", kind=kind)


def _resolve(future: asyncio.Future[bool], value: bool) -> None:
    if not future.done():
        future.set_result(value)

"""Fault-injection transport wrapper (deterministic).

Wraps a real transport and injects send/receive failures at deterministic
intervals so resilience tests are repeatable.
"""

from __future__ import annotations

import asyncio
import contextlib
import random
from typing import Any

from wsterm.constants import CLOSE_GOING_AWAY
from wsterm.errors import TransportClosedError
from wsterm.transport.base import ConnectionTransport


class ChaosTransport(ConnectionTransport):
    def __init__(
        self,
        inner: ConnectionTransport,
        *,
        seed: int = 1,
        fail_every_n_sends: int = 0,
        disconnect_every_n_receives: int = 0,
        max_jitter_ms: int = 0,
        label: str = "chaos",
    ) -> None:
        self._inner = inner
        self._rng = random.Random(int(seed))
        self._send_fail_n = int(fail_every_n_sends or 0)
        self._disconnect_n = int(disconnect_every_n_receives or 0)
        self._max_jitter_ms = int(max_jitter_ms or 0)
        self._label = str(label or "chaos")
        self._tx_count = 0
        self._rx_count = 0

    async def connect(self, url: str, headers: dict[str, str] | None = None, **kwargs: Any) -> None:
        await self._inner.connect(url, headers, **kwargs)

    async def disconnect(self, code: int = CLOSE_GOING_AWAY) -> None:
        await self._inner.disconnect(code)

    async def send(self, text: str) -> None:
        self._tx_count += 1
        await self._jitter()

        if self._send_fail_n > 0 and (self._tx_count % self._send_fail_n) == 0:
            raise TransportClosedError(f"{self._label}: injected send failure #{self._tx_count}")

        await self._inner.send(text)

    async def receive(self) -> str | bytes:
        self._rx_count += 1
        await self._jitter()

        if self._disconnect_n > 0 and (self._rx_count % self._disconnect_n) == 0:
            with contextlib.suppress(Exception):
                await self._inner.disconnect()
            raise TransportClosedError(f"{self._label}: injected disconnect on receive #{self._rx_count}")

        return await self._inner.receive()

    def is_connected(self) -> bool:
        return self._inner.is_connected()

    async def _jitter(self) -> None:
        if self._max_jitter_ms > 0:
            await asyncio.sleep(self._rng.uniform(0.0, float(self._max_jitter_ms)) / 1000.0)

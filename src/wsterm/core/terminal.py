# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Presentation-facing terminal model.

Holds the user-editable fields (endpoint, token, pending input) and exposes
the session's published state. A view only reads these attributes and calls
``toggle_connection()`` / ``send_line()``; it never touches the session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wsterm.core.session import Session
from wsterm.settings import Settings

if TYPE_CHECKING:
    from wsterm.core.session import WatchCallback


class TerminalModel:
    def __init__(self, session: Session | None = None, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self.session = session or Session(
            output_limit=settings.output_limit,
            open_timeout=settings.open_timeout,
            ping_interval=settings.ping_interval,
        )
        self.server_url: str = settings.server_url
        self.token: str = settings.token
        self.input: str = ""

    @property
    def output(self) -> str:
        return self.session.output

    @property
    def connected(self) -> bool:
        return self.session.connected

    @property
    def status(self) -> str:
        return self.session.status

    def watch(self, callback: WatchCallback) -> None:
        self.session.add_watch(callback)

    async def toggle_connection(self) -> None:
        """Connect when disconnected, disconnect when connected."""
        if self.session.connected:
            await self.session.terminate()
        else:
            self.session.initiate(self.server_url, self.token)

    async def send_line(self) -> bool:
        """Submit the pending input as one line and clear it."""
        line = self.input
        self.input = ""
        return await self.session.submit_line(line)

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from wsterm.core.session import Session

from .fakes import TransportRecorder


@pytest.fixture
def transports() -> TransportRecorder:
    """Factory handing out in-memory transports."""
    return TransportRecorder()


@pytest.fixture
def session(transports: TransportRecorder) -> Session:
    return Session(transport_factory=transports)


@pytest.fixture
def ws_url() -> str:
    """Endpoint for unit tests (never dialed by the fake transport)."""
    return "ws://localhost:7070/ws"

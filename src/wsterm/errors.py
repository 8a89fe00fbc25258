# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for wsterm."""


class WstermError(Exception):
    """Base exception for wsterm."""

    pass


class InvalidEndpointError(WstermError, ValueError):
    """Endpoint URL is not a valid WebSocket URI."""

    pass


class TransportClosedError(WstermError, ConnectionError):
    """Transport is closed or failed during open, send or receive."""

    pass

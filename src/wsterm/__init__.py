# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""wsterm: a line-oriented remote terminal client over WebSocket."""

from __future__ import annotations

from wsterm.core import OutputBuffer, Session, SessionChange, SessionState, TerminalModel

__version__ = "0.1.0"

__all__ = ["OutputBuffer", "Session", "SessionChange", "SessionState", "TerminalModel", "__version__"]

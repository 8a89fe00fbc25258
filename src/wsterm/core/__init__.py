"""Core session management."""

from __future__ import annotations

from wsterm.core.output_buffer import OutputBuffer
from wsterm.core.session import Session, SessionChange, SessionState
from wsterm.core.terminal import TerminalModel

__all__ = [
    "OutputBuffer",
    "Session",
    "SessionChange",
    "SessionState",
    "TerminalModel",
]

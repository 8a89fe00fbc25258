# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded buffer of received session output."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from wsterm.constants import DEFAULT_OUTPUT_LIMIT


@dataclass
class OutputBuffer:
    """Append-only text log that keeps only the newest ``max_chars`` characters.

    Appends are amortized O(len(text)): chunks live in a deque with a running
    size, whole chunks are dropped from the left and only the oldest surviving
    chunk is sliced. ``snapshot()`` joins lazily and caches the joined string
    until the next append; the chunks themselves are never merged.
    """

    max_chars: int = DEFAULT_OUTPUT_LIMIT
    _chunks: deque[str] = field(default_factory=deque, repr=False)
    _size: int = 0
    _joined: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.max_chars < 1:
            raise ValueError(f"max_chars must be positive, got {self.max_chars}")

    @property
    def size(self) -> int:
        """Number of retained characters."""
        return self._size

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    def append(self, text: str) -> None:
        """Append ``text``, then discard the oldest characters beyond the limit."""
        if not text:
            return

        if len(text) >= self.max_chars:
            # Nothing already retained can survive
            self._chunks.clear()
            self._chunks.append(text[-self.max_chars :])
            self._size = self.max_chars
            self._joined = None
            return

        self._chunks.append(text)
        self._size += len(text)
        self._joined = None

        excess = self._size - self.max_chars
        while excess > 0:
            oldest = self._chunks[0]
            if len(oldest) <= excess:
                self._chunks.popleft()
                self._size -= len(oldest)
                excess -= len(oldest)
            else:
                self._chunks[0] = oldest[excess:]
                self._size -= excess
                excess = 0

    def snapshot(self) -> str:
        """Return the retained content as one string."""
        if self._joined is None:
            self._joined = "".join(self._chunks)
        return self._joined

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        return self.snapshot()

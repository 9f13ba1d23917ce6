"""Port: incremental transcript source (speech-to-text engine or scripted double)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol


class TranscriptSource(Protocol):
    """Abstract producer of transcript fragments."""

    def stream(self) -> AsyncIterator[str]:
        """Return a lazy, time-ordered iterator of fragments. May be unbounded."""
        ...

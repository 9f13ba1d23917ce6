"""Port: LLM chat client."""

from __future__ import annotations

from typing import Protocol


class LLMClient(Protocol):
    """Abstract LLM client. Zero framework types leak through."""

    async def chat_single(self, model: str, prompt: str) -> str:
        """Single-turn chat in JSON mode. Returns the raw message text."""
        ...

    def check_model(self, model: str) -> tuple[bool, str]:
        """Pre-flight: is the provider reachable and *model* usable? Returns (ok, error_message)."""
        ...

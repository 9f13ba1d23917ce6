"""Port: transcript summarizer."""

from __future__ import annotations

from typing import Protocol

from clinic_scribe.l1_entities.summary import SummaryResult


class Summarizer(Protocol):
    """Abstract summarizer. One result or one failure per call, never partial."""

    async def generate_summary(self, transcript: str) -> SummaryResult:
        """Summarize *transcript*.

        Raises EmptyInputError for an empty transcript and SummarizationFailure
        when the backend cannot produce a result.
        """
        ...

"""Gateway: scripted summarizer — deterministic double for an LLM summarization backend."""

from __future__ import annotations

import asyncio

from clinic_scribe.l1_entities.errors import EmptyInputError
from clinic_scribe.l1_entities.summary import SummaryResult

DEMO_SUMMARY = SummaryResult(
    text=(
        'Patient reported difficulty sleeping for the past two weeks, primarily trouble falling asleep '
        'due to racing thoughts about work. Patient attributes the issue to increased stress from longer '
        'work hours and an upcoming project deadline. Patient has tried over-the-counter sleep aids but '
        'experienced grogginess as a side effect. Discussed sleep hygiene practices as a first-line '
        'approach before considering medication.'
    ),
    key_points=[
        'Insomnia for past two weeks',
        'Difficulty falling asleep due to racing thoughts',
        'Work-related stress as likely cause',
        'Previous negative experience with OTC sleep aids',
        'Sleep hygiene practices recommended',
    ],
    prescriptions=[],
)


class ScriptedSummarizer:
    """Waits *latency* seconds, then returns a fixed summary."""

    def __init__(self, latency: float = 2.0, result: SummaryResult = DEMO_SUMMARY) -> None:
        self._latency = latency
        self._result = result

    async def generate_summary(self, transcript: str) -> SummaryResult:
        if not transcript:
            raise EmptyInputError('cannot summarize an empty transcript')
        await asyncio.sleep(self._latency)
        return self._result

"""Gateway: scripted transcript source — development double for a speech-to-text engine."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence

DEMO_CONSULTATION: tuple[str, ...] = (
    'Doctor: Good morning, how are you feeling today?',
    "Patient: I've been having some trouble sleeping lately.",
    "Doctor: I'm sorry to hear that. How long has this been going on?",
    'Patient: For about two weeks now. I think it might be stress-related.',
    "Doctor: That's certainly possible. Let's talk about your stress levels and sleep habits.",
    "Patient: I've been working longer hours and have a big project due soon.",
    'Doctor: I see. Are you having trouble falling asleep or staying asleep?',
    'Patient: Mostly falling asleep. My mind just keeps racing with thoughts about work.',
    "Doctor: That's common with stress-induced insomnia. Let's discuss some strategies that might help.",
    "Patient: That would be great. I've tried over-the-counter sleep aids but they leave me groggy.",
    "Doctor: I understand. Let's focus on sleep hygiene practices first before considering medication.",
)


class ScriptedTranscriptSource:
    """Yields one scripted line every *interval* seconds, then ends. Each stream restarts the script."""

    def __init__(self, phrases: Sequence[str] = DEMO_CONSULTATION, interval: float = 3.0) -> None:
        self._phrases = tuple(phrases)
        self._interval = interval

    async def stream(self) -> AsyncIterator[str]:
        for phrase in self._phrases:
            await asyncio.sleep(self._interval)
            yield phrase

"""Textual Message subclasses — contracts between controller/workers and the App."""

from __future__ import annotations

from textual.message import Message

from clinic_scribe.l1_entities.session_record import SessionRecord


class SessionChanged(Message):
    """Posted when the transcription session appends, ticks, or changes state."""


class SummaryReady(Message):
    """Posted by the summary worker when a session was summarized and saved."""

    def __init__(self, record: SessionRecord) -> None:
        super().__init__()
        self.record = record


class SummaryFailed(Message):
    """Posted by the summary worker when finishing was rejected or failed."""

    def __init__(self, error: str) -> None:
        super().__init__()
        self.error = error

"""Use case: finish a session — validate, summarize, persist, reset."""

from __future__ import annotations

import logging

from clinic_scribe.l1_entities.errors import SummaryInProgressError, ValidationError
from clinic_scribe.l1_entities.session_record import SessionRecord
from clinic_scribe.l2_use_cases.ports.persistence import SessionRepository
from clinic_scribe.l2_use_cases.ports.summarizer import Summarizer
from clinic_scribe.l2_use_cases.transcription_session import TranscriptionSession

log = logging.getLogger('cs.finish')


class FinishSessionUseCase:
    """Turns a captured transcript into a persisted SessionRecord.

    At most one summarization is in flight per use case instance. Once input
    is valid, recording is stopped so the summarized transcript is final. Any
    failure before persistence succeeds keeps the transcript and duration so
    the user can retry; the session is reset only after the record is stored.
    """

    def __init__(self, summarizer: Summarizer, persistence: SessionRepository) -> None:
        self._summarizer = summarizer
        self._persistence = persistence
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def execute(
        self,
        title: str,
        session: TranscriptionSession,
        patient_id: str,
    ) -> SessionRecord:
        """Finish *session* under *title* for *patient_id*. Returns the stored record."""
        if not title.strip():
            raise ValidationError('missing title')
        if not session.transcript.strip():
            raise ValidationError('empty transcript')
        if self._in_progress:
            raise SummaryInProgressError('summary already in progress')

        # Nothing may be appended between the summarized snapshot and reset().
        session.stop()
        transcript = session.transcript
        duration = session.duration
        log.info('Finishing session %r: %d chars, %d min', title, len(transcript), duration)

        self._in_progress = True
        try:
            summary = await self._summarizer.generate_summary(transcript)
            record = SessionRecord.create(
                title=title.strip(),
                transcript=transcript,
                duration_minutes=duration,
                summary=summary,
            )
            path = self._persistence.add_session(patient_id, record)
        finally:
            self._in_progress = False

        log.info('Session %s saved to %s', record.id, path)
        session.reset()
        return record

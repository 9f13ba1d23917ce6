"""SessionController — owns the transcription session and maps finish outcomes to user messages."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from clinic_scribe.l1_entities.config import AppConfig
from clinic_scribe.l1_entities.errors import (
    EmptyInputError,
    SummarizationFailure,
    SummaryInProgressError,
    ValidationError,
)
from clinic_scribe.l1_entities.session_record import SessionRecord
from clinic_scribe.l2_use_cases.finish_session_use_case import FinishSessionUseCase
from clinic_scribe.l2_use_cases.ports.persistence import SessionRepository
from clinic_scribe.l2_use_cases.ports.summarizer import Summarizer
from clinic_scribe.l2_use_cases.ports.transcript_source import TranscriptSource
from clinic_scribe.l2_use_cases.transcription_session import TranscriptionSession

log = logging.getLogger('cs.controller')

_VALIDATION_MESSAGES = {
    'missing title': 'Please enter a session title.',
    'empty transcript': 'The transcript is empty. Please record a session first.',
}
SUMMARY_FAILED_MESSAGE = 'Failed to generate summary. Please try again.'


@dataclass(frozen=True)
class FinishResult:
    """Outcome of a finish attempt — either the saved record or a user-facing error."""

    record: SessionRecord | None = None
    error: str = ''

    @property
    def ok(self) -> bool:
        return self.record is not None


class SessionController:
    """Central orchestrator bridging the session and finish use case to the TUI.

    Owns the TranscriptionSession, the session title, and the patient id.
    The App (L4) delegates all business decisions to this controller.
    """

    def __init__(
        self,
        config: AppConfig,
        source: TranscriptSource,
        summarizer: Summarizer,
        persistence: SessionRepository,
        *,
        patient_id: str = 'default',
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._config = config
        self._persistence = persistence
        self.session = TranscriptionSession(
            source,
            tick_interval=config.transcription.tick_interval,
            on_change=on_change,
        )
        self._finish_uc = FinishSessionUseCase(summarizer, persistence)

        self.patient_id = patient_id
        self.title: str = ''
        self.latest_record: SessionRecord | None = None

    @property
    def summary_in_progress(self) -> bool:
        return self._finish_uc.in_progress

    def can_finish(self) -> bool:
        """Whether the finish action should be offered right now."""
        return not self.summary_in_progress and bool(self.session.transcript.strip())

    def toggle_recording(self) -> bool:
        """Start when idle, stop when active. Returns the new active state."""
        if self.session.is_active:
            self.session.stop()
        else:
            self.session.start()
        return self.session.is_active

    def clear(self) -> None:
        """Discard the current transcript and duration."""
        self.session.reset()

    def saved_sessions(self) -> list[SessionRecord]:
        return self._persistence.list_sessions(self.patient_id)

    async def finish(self) -> FinishResult:
        """Summarize and save the session. On success clears the title; on failure keeps everything."""
        try:
            record = await self._finish_uc.execute(self.title, self.session, self.patient_id)
        except ValidationError as e:
            log.info('Finish rejected: %s', e)
            return FinishResult(error=_VALIDATION_MESSAGES.get(str(e), str(e)))
        except SummaryInProgressError as e:
            log.warning('Finish rejected: %s', e)
            return FinishResult(error='A summary is already being generated.')
        except (SummarizationFailure, EmptyInputError) as e:
            log.error('Summary failed: %s', e)
            return FinishResult(error=SUMMARY_FAILED_MESSAGE)
        except OSError as e:
            log.error('Saving session failed: %s', e, exc_info=True)
            return FinishResult(error=f'Failed to save session: {e}')

        self.latest_record = record
        self.title = ''
        return FinishResult(record=record)

"""SessionApp — new-session TUI: record, review the transcript, finish and summarize."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Input, Static

from clinic_scribe.l1_entities.config import AppConfig
from clinic_scribe.l3_interface_adapters.controllers.session_controller import FinishResult, SessionController
from clinic_scribe.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from clinic_scribe.l4_frameworks_and_drivers.messages import SessionChanged, SummaryFailed, SummaryReady
from clinic_scribe.l4_frameworks_and_drivers.widgets.status_bar import StatusBar
from clinic_scribe.l4_frameworks_and_drivers.widgets.summary_panel import SummaryPanel
from clinic_scribe.l4_frameworks_and_drivers.widgets.transcript_panel import TranscriptPanel

log = logging.getLogger('cs.app')


class SessionApp(TextualApp):
    """Single-session authoring surface. All business decisions go through SessionController."""

    CSS = """
    #header {
        height: 1;
        background: $primary;
        color: $text;
        text-style: bold;
    }
    #title-input {
        margin: 0 0 1 0;
    }
    #main-panels {
        height: 1fr;
    }
    #transcript-panel, #summary-panel {
        width: 1fr;
    }
    #buttons {
        height: auto;
        padding: 0 1;
    }
    #buttons Button {
        margin-right: 2;
    }
    """

    BINDINGS = [
        Binding('ctrl+r', 'toggle_recording', 'Start/Pause', priority=True),
        Binding('ctrl+l', 'clear_transcript', 'Clear', priority=True),
        Binding('ctrl+f', 'finish_session', 'Finish', priority=True),
        Binding('ctrl+q', 'quit_app', 'Quit', priority=True),
    ]

    def __init__(
        self,
        config: AppConfig,
        output_dir: Path,
        controller: SessionController | None = None,
        title: str = '',
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._config = config
        self._output_dir = output_dir
        self._output_dir.mkdir(parents=True, exist_ok=True)

        setup_file_logging(self._output_dir)

        # Controller (injected or created with default wiring)
        if controller is not None:
            self._controller = controller
        else:  # pragma: no cover -- composition-root wiring; controller always injected in tests
            from clinic_scribe.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: only wired when no controller injected (non-test path)
                DependencyContainer,
            )

            self._controller = DependencyContainer(config, output_dir).controller

        self._controller.title = title
        self._summary_running = False
        self._shown_error = ''

    def compose(self) -> ComposeResult:
        yield Static(f'  clinic-scribe | New Session — patient {self._controller.patient_id}', id='header')
        yield Input(
            value=self._controller.title,
            placeholder='Enter a title for this session',
            id='title-input',
        )
        with Horizontal(id='main-panels'):
            yield TranscriptPanel(id='transcript-panel')
            yield SummaryPanel(id='summary-panel')
        with Horizontal(id='buttons'):
            yield Button('Start Recording', id='record-button', variant='success')
            yield Button('Clear Transcript', id='clear-button')
            yield Button('Finish & Summarize', id='finish-button', variant='primary')
        yield StatusBar(id='status-bar')

    def on_mount(self) -> None:
        self._controller.session.on_change = self._on_session_change
        bar = self.query_one('#status-bar', StatusBar)
        bar.saved_count = len(self._controller.saved_sessions())
        self._refresh_controls()

    def on_unmount(self) -> None:
        self._controller.session.stop()

    def _on_session_change(self) -> None:
        self.post_message(SessionChanged())

    def _hints(self, recording: bool) -> str:
        toggle = 'pause' if recording else 'record'
        return rf'\[^R] {toggle}  \[^L] clear  \[^F] finish  \[^Q] quit'

    def _refresh_controls(self) -> None:
        session = self._controller.session
        self.query_one('#transcript-panel', TranscriptPanel).show_transcript(session.transcript)

        bar = self.query_one('#status-bar', StatusBar)
        bar.recording = session.is_active
        bar.duration = session.duration
        bar.keybinding_hints = self._hints(session.is_active)

        record_button = self.query_one('#record-button', Button)
        record_button.label = 'Pause Recording' if session.is_active else 'Start Recording'
        record_button.variant = 'warning' if session.is_active else 'success'

        finish_button = self.query_one('#finish-button', Button)
        finish_button.disabled = self._summary_running or not self._controller.can_finish()
        finish_button.label = 'Generating Summary...' if self._summary_running else 'Finish & Summarize'

    # --- Message Handlers ---

    def on_session_changed(self, message: SessionChanged) -> None:
        self._refresh_controls()
        error = self._controller.session.last_error
        if error and error != self._shown_error:
            self.notify(error, title='Transcription Error', severity='error', timeout=8)
        self._shown_error = error

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == 'title-input':
            self._controller.title = event.value

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == 'record-button':
            self.action_toggle_recording()
        elif button_id == 'clear-button':
            self.action_clear_transcript()
        elif button_id == 'finish-button':
            self.action_finish_session()

    def on_summary_ready(self, message: SummaryReady) -> None:
        self.query_one('#summary-panel', SummaryPanel).show_record(message.record)
        self.query_one('#title-input', Input).value = ''
        bar = self.query_one('#status-bar', StatusBar)
        bar.activity = ''
        bar.saved_count += 1
        self._refresh_controls()
        self.notify('The session has been saved and summarized successfully.', title='Session Completed', timeout=5)

    def on_summary_failed(self, message: SummaryFailed) -> None:
        self.query_one('#status-bar', StatusBar).activity = ''
        self._refresh_controls()
        self.notify(message.error, title='Error', severity='error', timeout=8)

    # --- Workers ---

    def _run_summary_worker(self) -> None:
        self._summary_running = True
        self.query_one('#status-bar', StatusBar).activity = 'Generating summary...'
        self._refresh_controls()

        async def _summary_task() -> None:
            try:
                result = await self._controller.finish()
            except Exception as e:
                log.error('Finishing failed unexpectedly: %s', e, exc_info=True)
                result = FinishResult(error=f'Unexpected error while finishing: {e}')
            finally:
                self._summary_running = False
            if result.record is not None:
                self.post_message(SummaryReady(record=result.record))
            else:
                self.post_message(SummaryFailed(error=result.error))

        self.run_worker(_summary_task, exclusive=True, group='summary')

    # --- Actions ---

    def action_toggle_recording(self) -> None:
        if self._controller.toggle_recording():
            self.notify('The session is now being recorded and transcribed.', title='Transcription Started', timeout=3)
        else:
            self.notify('The session recording has been paused.', title='Transcription Stopped', timeout=3)

    def action_clear_transcript(self) -> None:
        if self._summary_running:
            self.notify('Summary in progress — please wait', severity='warning', timeout=3)
            return
        self._controller.clear()

    def action_finish_session(self) -> None:
        if self._summary_running:
            self.notify('Summary already in progress', severity='warning', timeout=3)
            return
        self._run_summary_worker()

    def action_quit_app(self) -> None:
        if self._summary_running:
            self.notify('Summary in progress — please wait', severity='warning', timeout=3)
            return
        self.exit()

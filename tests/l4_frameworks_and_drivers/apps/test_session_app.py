"""Tests for the session TUI using headless Pilot."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from textual.widgets import Button, Input

from clinic_scribe.l1_entities.errors import SummarizationFailure
from clinic_scribe.l3_interface_adapters.controllers.session_controller import (
    SUMMARY_FAILED_MESSAGE,
    SessionController,
)
from clinic_scribe.l4_frameworks_and_drivers.apps.session import SessionApp
from clinic_scribe.l4_frameworks_and_drivers.config import build_app_config
from clinic_scribe.l4_frameworks_and_drivers.widgets.status_bar import StatusBar
from clinic_scribe.l4_frameworks_and_drivers.widgets.summary_panel import SummaryPanel
from clinic_scribe.l4_frameworks_and_drivers.widgets.transcript_panel import TranscriptPanel
from tests.conftest import FailingTranscriptSource, FakePersistence, FakeSummarizer, FakeTranscriptSource


def make_app(
    tmp_path: Path,
    *,
    source=None,
    summarizer: FakeSummarizer | None = None,
    title: str = '',
) -> tuple[SessionApp, FakeTranscriptSource, FakeSummarizer, FakePersistence]:
    config = build_app_config({})
    output_dir = tmp_path / 'output'
    source = source or FakeTranscriptSource()
    summarizer = summarizer or FakeSummarizer()
    persistence = FakePersistence(output_dir)
    controller = SessionController(
        config=config,
        source=source,
        summarizer=summarizer,
        persistence=persistence,
        patient_id='p1',
    )
    app = SessionApp(config=config, output_dir=output_dir, controller=controller, title=title)
    return app, source, summarizer, persistence


def _messages(mock_notify) -> list[str]:
    return [c.args[0] for c in mock_notify.call_args_list]


async def _record(app: SessionApp, pilot, source: FakeTranscriptSource, *fragments: str) -> None:
    await pilot.press('ctrl+r')
    for fragment in fragments:
        source.push(fragment)
        await pilot.pause(0.02)
    await pilot.press('ctrl+r')
    await pilot.pause()


class TestComposition:
    @pytest.mark.asyncio
    async def test_has_required_widgets(self, tmp_path):
        app, *_ = make_app(tmp_path)
        async with app.run_test():
            assert app.query_one('#title-input', Input)
            assert app.query_one('#transcript-panel', TranscriptPanel)
            assert app.query_one('#summary-panel', SummaryPanel)
            assert app.query_one('#status-bar', StatusBar)
            assert app.query_one('#record-button', Button).label.plain == 'Start Recording'

    @pytest.mark.asyncio
    async def test_finish_disabled_without_transcript(self, tmp_path):
        app, *_ = make_app(tmp_path)
        async with app.run_test():
            assert app.query_one('#finish-button', Button).disabled is True

    @pytest.mark.asyncio
    async def test_title_prefilled(self, tmp_path):
        app, *_ = make_app(tmp_path, title='Checkup')
        async with app.run_test():
            assert app.query_one('#title-input', Input).value == 'Checkup'


class TestRecording:
    @pytest.mark.asyncio
    async def test_ctrl_r_toggles(self, tmp_path):
        app, *_ = make_app(tmp_path)
        async with app.run_test() as pilot:
            await pilot.press('ctrl+r')
            await pilot.pause()
            bar = app.query_one('#status-bar', StatusBar)
            assert bar.recording is True
            assert app.query_one('#record-button', Button).label.plain == 'Pause Recording'

            await pilot.press('ctrl+r')
            await pilot.pause()
            assert bar.recording is False

    @pytest.mark.asyncio
    async def test_fragments_reach_panel(self, tmp_path):
        app, source, _, _ = make_app(tmp_path)
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.', 'Patient: Hi.')
            panel = app.query_one('#transcript-panel', TranscriptPanel)
            assert panel.text == 'Doctor: Hello.\n\nPatient: Hi.'
            assert app.query_one('#finish-button', Button).disabled is False

    @pytest.mark.asyncio
    async def test_record_button_click(self, tmp_path):
        app, *_ = make_app(tmp_path)
        async with app.run_test() as pilot:
            await pilot.click('#record-button')
            await pilot.pause()
            assert app.query_one('#status-bar', StatusBar).recording is True

    @pytest.mark.asyncio
    async def test_clear(self, tmp_path):
        app, source, _, _ = make_app(tmp_path)
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.')
            await pilot.press('ctrl+l')
            await pilot.pause()
            assert app.query_one('#transcript-panel', TranscriptPanel).text == ''

    @pytest.mark.asyncio
    async def test_source_error_notified(self, tmp_path):
        source = FailingTranscriptSource([], ConnectionError('input device lost'))
        app, *_ = make_app(tmp_path, source=source)
        async with app.run_test() as pilot:
            with patch.object(app, 'notify') as mock_notify:
                await pilot.press('ctrl+r')
                await pilot.pause(0.05)
            assert any('input device lost' in m for m in _messages(mock_notify))


class TestFinish:
    @pytest.mark.asyncio
    async def test_success_shows_summary_and_resets(self, tmp_path):
        app, source, _, persistence = make_app(tmp_path, title='Visit')
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.')
            await pilot.press('ctrl+f')
            await pilot.pause(0.05)

            assert len(persistence.add_calls) == 1
            assert persistence.add_calls[0][0] == 'p1'
            assert '# Visit' in app.query_one('#summary-panel', SummaryPanel).current_markdown
            assert app.query_one('#title-input', Input).value == ''
            assert app.query_one('#transcript-panel', TranscriptPanel).text == ''
            assert app.query_one('#status-bar', StatusBar).saved_count == 1

    @pytest.mark.asyncio
    async def test_missing_title_notifies(self, tmp_path):
        app, source, _, persistence = make_app(tmp_path)
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.')
            with patch.object(app, 'notify') as mock_notify:
                await pilot.press('ctrl+f')
                await pilot.pause(0.05)
            assert 'Please enter a session title.' in _messages(mock_notify)
            assert persistence.add_calls == []
            assert app.query_one('#transcript-panel', TranscriptPanel).text == 'Doctor: Hello.'

    @pytest.mark.asyncio
    async def test_title_typed_into_input(self, tmp_path):
        app, source, _, persistence = make_app(tmp_path)
        async with app.run_test() as pilot:
            app.query_one('#title-input', Input).value = 'Typed'
            await pilot.pause()
            await _record(app, pilot, source, 'Doctor: Hello.')
            await pilot.press('ctrl+f')
            await pilot.pause(0.05)
            assert persistence.add_calls[0][1].title == 'Typed'

    @pytest.mark.asyncio
    async def test_summary_failure_keeps_state(self, tmp_path):
        summarizer = FakeSummarizer(error=SummarizationFailure('LLM error: boom'))
        app, source, _, persistence = make_app(tmp_path, summarizer=summarizer, title='Visit')
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.')
            with patch.object(app, 'notify') as mock_notify:
                await pilot.press('ctrl+f')
                await pilot.pause(0.05)
            assert SUMMARY_FAILED_MESSAGE in _messages(mock_notify)
            assert persistence.add_calls == []
            assert app.query_one('#title-input', Input).value == 'Visit'
            assert app.query_one('#transcript-panel', TranscriptPanel).text == 'Doctor: Hello.'
            assert app.query_one('#finish-button', Button).disabled is False

    @pytest.mark.asyncio
    async def test_unexpected_finish_error_reported(self, tmp_path):
        app, source, _, persistence = make_app(tmp_path, title='Visit')
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.')
            with (
                patch.object(app._controller, 'finish', side_effect=RuntimeError('disk unplugged')),
                patch.object(app, 'notify') as mock_notify,
            ):
                await pilot.press('ctrl+f')
                await pilot.pause(0.05)

            assert any('disk unplugged' in m for m in _messages(mock_notify))
            assert app.query_one('#status-bar', StatusBar).activity == ''
            finish_button = app.query_one('#finish-button', Button)
            assert finish_button.label.plain == 'Finish & Summarize'
            assert finish_button.disabled is False
            assert persistence.add_calls == []

    @pytest.mark.asyncio
    async def test_single_summary_in_flight(self, tmp_path):
        summarizer = FakeSummarizer()
        app, source, _, persistence = make_app(tmp_path, summarizer=summarizer, title='Visit')
        async with app.run_test() as pilot:
            await _record(app, pilot, source, 'Doctor: Hello.')
            summarizer.hold()
            await pilot.press('ctrl+f')
            await pilot.pause()

            finish_button = app.query_one('#finish-button', Button)
            assert finish_button.disabled is True
            assert app.query_one('#status-bar', StatusBar).activity == 'Generating summary...'

            with patch.object(app, 'notify') as mock_notify:
                await pilot.press('ctrl+f')
                await pilot.pause()
            assert 'Summary already in progress' in _messages(mock_notify)

            summarizer.release()
            await pilot.pause(0.05)
            assert len(summarizer.calls) == 1
            assert len(persistence.add_calls) == 1
            assert app.query_one('#status-bar', StatusBar).activity == ''


class TestQuit:
    @pytest.mark.asyncio
    async def test_quit_stops_recording(self, tmp_path):
        app, *_ = make_app(tmp_path)
        async with app.run_test() as pilot:
            await pilot.press('ctrl+r')
            await pilot.pause()
            await pilot.press('ctrl+q')
        assert app._controller.session.is_active is False

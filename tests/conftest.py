"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from clinic_scribe.l1_entities.config import AppConfig
from clinic_scribe.l1_entities.errors import EmptyInputError
from clinic_scribe.l1_entities.session_record import SessionRecord
from clinic_scribe.l1_entities.summary import SummaryResult
from clinic_scribe.l4_frameworks_and_drivers.config import build_app_config

FAKE_SUMMARY = SummaryResult(
    text='Patient reports two weeks of insomnia.',
    key_points=['Insomnia for two weeks', 'Work stress'],
    prescriptions=['Melatonin 3 mg at bedtime'],
)


async def settle(rounds: int = 5) -> None:
    """Let pending callbacks and woken tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# --- Protocol-conforming Fakes ---


class FakeTranscriptSource:
    """Transcript source driven by the test: fragments arrive only when pushed."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self.stream_calls = 0

    def push(self, *fragments: str) -> None:
        for fragment in fragments:
            self._queue.put_nowait(fragment)

    def end(self) -> None:
        """Make the current stream finish after any pushed fragments."""
        self._queue.put_nowait(None)

    async def stream(self):
        self.stream_calls += 1
        while True:
            fragment = await self._queue.get()
            if fragment is None:
                return
            yield fragment


class FailingTranscriptSource:
    """Transcript source that yields some fragments, then raises."""

    def __init__(self, fragments: list[str], error: Exception) -> None:
        self._fragments = fragments
        self._error = error

    async def stream(self):
        for fragment in self._fragments:
            await asyncio.sleep(0)
            yield fragment
        raise self._error


class FakeSummarizer:
    """Fake summarizer for L2/L3 tests. Optionally blocks until released."""

    def __init__(self, result: SummaryResult = FAKE_SUMMARY, error: Exception | None = None) -> None:
        self._result = result
        self._error = error
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    def hold(self) -> None:
        """Block subsequent calls until release() is called."""
        self.gate = asyncio.Event()

    def release(self) -> None:
        if self.gate is not None:
            self.gate.set()

    def set_error(self, error: Exception | None) -> None:
        self._error = error

    async def generate_summary(self, transcript: str) -> SummaryResult:
        self.calls.append(transcript)
        if not transcript:
            raise EmptyInputError('cannot summarize an empty transcript')
        if self.gate is not None:
            await self.gate.wait()
        if self._error is not None:
            raise self._error
        return self._result


class FakePersistence:
    """Fake session repository for L2/L3 tests."""

    def __init__(self, output_dir: Path | None = None) -> None:
        self._output_dir = output_dir or Path('/fake/output')
        self.add_calls: list[tuple[str, SessionRecord]] = []
        self.error: Exception | None = None

    def add_session(self, patient_id: str, record: SessionRecord) -> Path:
        if self.error is not None:
            raise self.error
        self.add_calls.append((patient_id, record))
        return self._output_dir / 'patients' / patient_id / 'sessions' / f'{record.id}.json'

    def list_sessions(self, patient_id: str) -> list[SessionRecord]:
        return [record for pid, record in self.add_calls if pid == patient_id]


class FakeLLMClient:
    """Fake LLM client for summarizer tests."""

    def __init__(self, response: str = '{}') -> None:
        self._response = response
        self._error: Exception | None = None
        self._delay = 0.0
        self.prompts: list[tuple[str, str]] = []
        self._model_check = (True, '')
        self.checked_models: list[str] = []

    async def chat_single(self, model: str, prompt: str) -> str:
        self.prompts.append((model, prompt))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._response

    def check_model(self, model: str) -> tuple[bool, str]:
        self.checked_models.append(model)
        return self._model_check

    def set_response(self, response: str) -> None:
        self._response = response

    def set_error(self, error: Exception) -> None:
        self._error = error

    def set_delay(self, seconds: float) -> None:
        self._delay = seconds

    def set_model_check(self, ok: bool, msg: str = '') -> None:
        self._model_check = (ok, msg)


# --- Standard Fixtures ---


@pytest.fixture(autouse=True)
def _close_debug_log_handlers():
    """Detach file handlers added by setup_file_logging so tmp dirs are not held open."""
    yield
    root = logging.getLogger('cs')
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    d = tmp_path / 'output'
    d.mkdir()
    return d


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def fast_config() -> AppConfig:
    return build_app_config(
        {
            'transcription': {'fragment_interval': 0.01, 'tick_interval': 0.01},
            'summary': {'latency': 0.0},
        }
    )


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
transcription:
  fragment_interval: 1.5
  tick_interval: 30
summary:
  model: "llama3:8b"
  latency: 0.5
  timeout: 45
output:
  directory: "./test_output"
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p


@pytest.fixture
def fake_source() -> FakeTranscriptSource:
    return FakeTranscriptSource()


@pytest.fixture
def fake_summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture
def fake_persistence(tmp_output_dir: Path) -> FakePersistence:
    return FakePersistence(tmp_output_dir)


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()

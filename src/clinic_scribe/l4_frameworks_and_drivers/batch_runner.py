"""Batch runner — headless replay of a transcript file into a session, then one summary."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from clinic_scribe.l1_entities.config import AppConfig
from clinic_scribe.l1_entities.session_record import render_record_markdown
from clinic_scribe.l3_interface_adapters.controllers.session_controller import FinishResult, SessionController
from clinic_scribe.l3_interface_adapters.gateways.text_file_transcript_source import TextFileTranscriptSource
from clinic_scribe.l4_frameworks_and_drivers.container import DependencyContainer
from clinic_scribe.l4_frameworks_and_drivers.infra_config import InfraConfig
from clinic_scribe.l4_frameworks_and_drivers.logging_setup import setup_file_logging


def _err(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


async def capture_and_finish(controller: SessionController) -> FinishResult:
    """Run the session until its source is exhausted, stop it, then finish."""
    session = controller.session
    session.start()
    await session.join()
    session.stop()
    if session.last_error:
        return FinishResult(error=session.last_error)
    return await controller.finish()


def run_batch(
    transcript_path: Path,
    config: AppConfig,
    out_dir: Path,
    infra: InfraConfig,
    *,
    patient_id: str = 'default',
    title: str | None = None,
) -> None:
    """Replay *transcript_path*, summarize it, save the record, print it as markdown. Blocks until done."""
    setup_file_logging(out_dir)
    _err(f'Loading transcript: {transcript_path}')

    container = DependencyContainer(
        config,
        out_dir,
        infra=infra,
        patient_id=patient_id,
        source=TextFileTranscriptSource(transcript_path),
    )
    controller = container.controller
    controller.title = title or transcript_path.stem

    _err('Summarizing...')
    result = asyncio.run(capture_and_finish(controller))

    if result.record is None:
        _err(f'Error: {result.error}')
        raise SystemExit(1)

    record = result.record
    _err(f'\nSaved session {record.id} for patient {patient_id} under {out_dir}\n')
    print(render_record_markdown(record))

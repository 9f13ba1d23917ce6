"""Gateway: file-based persistence — implements SessionRepository port."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import pydantic

from clinic_scribe.l1_entities.session_record import SessionRecord

log = logging.getLogger('cs.persist')


def safe_name(value: str) -> str:
    """Make *value* usable as a single path component."""
    cleaned = re.sub(r'[^\w\-]', '_', value.strip())
    return cleaned or '_'


class FileSessionRepository:
    """Stores each session record as a JSON file under ``patients/<id>/sessions/``."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir
        self._output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def sessions_dir(self, patient_id: str) -> Path:
        return self._output_dir / 'patients' / safe_name(patient_id) / 'sessions'

    def add_session(self, patient_id: str, record: SessionRecord) -> Path:
        directory = self.sessions_dir(patient_id)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = record.date.strftime('%Y-%m-%d_%H%M%S')
        path = directory / f'{stamp}_{record.id}.json'
        path.write_text(record.model_dump_json(indent=2), encoding='utf-8')
        log.info(
            'Saved session %s for patient %s (%d chars, %d min) → %s',
            record.id,
            patient_id,
            len(record.transcript),
            record.duration,
            path.name,
        )
        return path

    def list_sessions(self, patient_id: str) -> list[SessionRecord]:
        directory = self.sessions_dir(patient_id)
        if not directory.is_dir():
            return []
        records: list[SessionRecord] = []
        for path in sorted(directory.glob('*.json')):
            try:
                records.append(SessionRecord.model_validate_json(path.read_text(encoding='utf-8')))
            except (OSError, UnicodeDecodeError, pydantic.ValidationError) as e:
                log.warning('Skipping unreadable session file %s: %s', path.name, e)
        records.sort(key=lambda r: r.date)
        return records

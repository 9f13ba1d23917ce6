"""Session record entity — the finalized result of one capture-and-summarize cycle."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from clinic_scribe.l1_entities.summary import SummaryResult


class SessionRecord(BaseModel):
    """Immutable record handed to persistence once a session is finished."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    date: datetime
    duration: int = Field(ge=1, description='Elapsed recording time in whole minutes')
    transcript: str
    summary: str
    key_points: list[str] = Field(default_factory=list)
    prescriptions: list[str] = Field(default_factory=list)

    @classmethod
    def create(
        cls,
        title: str,
        transcript: str,
        duration_minutes: int,
        summary: SummaryResult,
        *,
        now: datetime | None = None,
    ) -> SessionRecord:
        """Build a record with a fresh id and timestamp. Zero duration is recorded as 1 minute."""
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            date=now or datetime.now(timezone.utc),
            duration=max(1, duration_minutes),
            transcript=transcript,
            summary=summary.text,
            key_points=list(summary.key_points),
            prescriptions=list(summary.prescriptions),
        )


def render_record_markdown(record: SessionRecord) -> str:
    """Render a record as Markdown for display or stdout."""
    lines = [
        f'# {record.title}',
        '',
        f'*{record.date.strftime("%Y-%m-%d %H:%M")} · {record.duration} min*',
        '',
        '## Summary',
        '',
        record.summary or '(none)',
        '',
        '## Key Points',
        '',
    ]
    lines.extend(f'- {p}' for p in record.key_points)
    if not record.key_points:
        lines.append('(none)')
    lines.extend(['', '## Prescriptions', ''])
    lines.extend(f'- {p}' for p in record.prescriptions)
    if not record.prescriptions:
        lines.append('(none)')
    return '\n'.join(lines) + '\n'

"""Port: persistence gateway for finished session records."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from clinic_scribe.l1_entities.session_record import SessionRecord


class SessionRepository(Protocol):
    """Abstract store for session records, keyed by patient."""

    def add_session(self, patient_id: str, record: SessionRecord) -> Path:
        """Store one finished session record."""
        ...

    def list_sessions(self, patient_id: str) -> list[SessionRecord]:
        """Return the stored records for a patient, oldest first."""
        ...

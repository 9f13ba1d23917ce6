"""Gateway: replay a plain-text transcript file as a fragment stream."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from pathlib import Path

from clinic_scribe.l1_entities.transcript import split_fragments

log = logging.getLogger('cs.source')


class TextFileTranscriptSource:
    """Streams the blank-line separated paragraphs of a UTF-8 text file."""

    def __init__(self, path: Path, interval: float = 0.0) -> None:
        self._path = path
        self._interval = interval

    async def stream(self) -> AsyncIterator[str]:
        fragments = split_fragments(self._path.read_text(encoding='utf-8'))
        log.info('Replaying %d fragments from %s', len(fragments), self._path)
        for fragment in fragments:
            await asyncio.sleep(self._interval)
            yield fragment

"""Transcription session — idle/active state machine that accumulates transcript and duration."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from clinic_scribe.l1_entities.transcript import append_fragment
from clinic_scribe.l2_use_cases.ports.transcript_source import TranscriptSource

log = logging.getLogger('cs.session')


class TranscriptionSession:
    """Owns recording state, the transcript, and the elapsed-minutes counter.

    While active, two asyncio tasks run on the current loop: one consumes the
    transcript source and appends fragments, the other adds one minute per
    ``tick_interval`` seconds. The session holds the only reference to each
    task, so ``stop()`` and ``reset()`` can always cancel them. Appends are
    also gated on task ownership, so a fragment that resolved just before
    ``stop()`` is dropped rather than applied late.
    """

    def __init__(
        self,
        source: TranscriptSource,
        *,
        tick_interval: float = 60.0,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._source = source
        self._tick_interval = tick_interval
        self.on_change = on_change

        self._active = False
        self._transcript = ''
        self._duration = 0
        self._fragment_task: asyncio.Task[None] | None = None
        self._ticker_task: asyncio.Task[None] | None = None
        self.last_error: str = ''

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def duration(self) -> int:
        """Whole minutes accumulated while active."""
        return self._duration

    def start(self) -> None:
        """Idle → Active. No-op when already active. Must be called from a running event loop."""
        if self._active:
            return
        loop = asyncio.get_running_loop()
        self._active = True
        self.last_error = ''
        self._fragment_task = loop.create_task(self._consume_fragments(), name='transcript-fragments')
        self._ticker_task = loop.create_task(self._tick_duration(), name='duration-ticker')
        log.info('Transcription started (transcript=%d chars, duration=%d min)', len(self._transcript), self._duration)
        self._notify()

    def stop(self) -> None:
        """Active → Idle. Cancels fragment production and duration ticks. No-op when idle."""
        if not self._active:
            return
        self._active = False
        fragment_task, ticker_task = self._fragment_task, self._ticker_task
        self._fragment_task = None
        self._ticker_task = None
        for task in (fragment_task, ticker_task):
            if task is not None:
                task.cancel()
        log.info('Transcription stopped (transcript=%d chars, duration=%d min)', len(self._transcript), self._duration)
        self._notify()

    def reset(self) -> None:
        """Stop, then clear transcript and duration. Allowed from either state."""
        self.stop()
        self._transcript = ''
        self._duration = 0
        self.last_error = ''
        log.info('Transcription reset')
        self._notify()

    async def join(self) -> None:
        """Wait until the current transcript source is exhausted, stopped, or failed."""
        task = self._fragment_task
        if task is None:
            return
        await asyncio.wait([task])

    # --- Owned tasks ---

    async def _consume_fragments(self) -> None:
        me = asyncio.current_task()
        fragments = aiter(self._source.stream())
        while True:
            try:
                fragment = await anext(fragments)
            except StopAsyncIteration:
                log.info('Transcript source exhausted')
                return
            except Exception as e:
                self.last_error = f'Transcript source error: {type(e).__name__}: {e}'
                log.error(self.last_error, exc_info=True)
                self._notify()
                return
            if self._fragment_task is not me:
                return
            self._transcript = append_fragment(self._transcript, fragment)
            log.debug('Fragment appended (%d chars): %s', len(fragment), fragment[:80])
            self._notify()

    async def _tick_duration(self) -> None:
        me = asyncio.current_task()
        while True:
            await asyncio.sleep(self._tick_interval)
            if self._ticker_task is not me:
                return
            self._duration += 1
            log.debug('Duration tick: %d min', self._duration)
            self._notify()

    def _notify(self) -> None:
        if self.on_change is None:
            return
        # Observers may fail; recording continues regardless.
        try:
            self.on_change()
        except Exception:
            log.exception('on_change callback failed')

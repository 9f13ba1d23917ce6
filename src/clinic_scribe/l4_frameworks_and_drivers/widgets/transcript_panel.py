"""Transcript panel — scrolling RichLog mirroring the session transcript."""

from __future__ import annotations

import pyperclip
from textual.binding import Binding
from textual.widgets import RichLog


class TranscriptPanel(RichLog):
    """Auto-scrolling, read-only view of the current transcript."""

    DEFAULT_CSS = """
    TranscriptPanel {
        border: solid $primary;
        scrollbar-size: 1 1;
    }
    TranscriptPanel:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [Binding('c', 'copy_content', 'Copy', show=False)]

    def __init__(self, title: str = 'Transcript', **kwargs) -> None:
        super().__init__(highlight=False, markup=False, wrap=True, auto_scroll=True, **kwargs)
        self.border_title = title
        self._text = ''

    @property
    def text(self) -> str:
        return self._text

    def show_transcript(self, transcript: str) -> None:
        """Render *transcript*, writing only the new tail when it extends what is shown."""
        if transcript == self._text:
            return
        if self._text and transcript.startswith(self._text):
            tail = transcript[len(self._text) :].lstrip('\n')
            self.write('')
            self.write(tail)
        else:
            self.clear()
            if transcript:
                self.write(transcript)
        self._text = transcript

    def action_copy_content(self) -> None:
        """Copy full transcript text to system clipboard."""
        if not self._text:
            self.app.notify('No transcript to copy', severity='warning', timeout=2)
            return
        pyperclip.copy(self._text)
        self.app.notify('Transcript copied', timeout=2)

"""Status bar — bottom bar showing recording state, duration, activity, and keybinding hints."""

from __future__ import annotations

from rich.cells import cell_len
from textual.reactive import reactive
from textual.widgets import Static

from clinic_scribe.l1_entities.transcript import format_duration


class StatusBar(Static):
    """Bottom status bar with recording state, elapsed minutes, and keybinding hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: auto;
        background: $surface;
        color: $text;
        padding: 0 1;
        overflow: hidden hidden;
    }
    """

    recording: reactive[bool] = reactive(False)
    duration: reactive[int] = reactive(0)
    saved_count: reactive[int] = reactive(0)
    activity: reactive[str] = reactive('')
    keybinding_hints: reactive[str] = reactive('')

    def render(self) -> str:
        status_icon = '● Recording in progress' if self.recording else '○ Recording paused'
        if self.duration > 0:
            elapsed = format_duration(self.duration)
        else:
            elapsed = 'Start recording to begin transcription'

        left_parts = [status_icon, elapsed]
        if self.saved_count:
            left_parts.append(f'{self.saved_count} saved')
        if self.activity:
            left_parts.append(f'⟳ {self.activity}')
        left = ' │ '.join(left_parts)

        hints = self.keybinding_hints
        if hints:
            content_width = (self.size.width or 80) - 2
            hints_width = cell_len(hints.replace(r'\[', '['))
            gap = content_width - cell_len(left) - hints_width
            if gap >= 2:
                left = left + ' ' * gap + hints
        return left

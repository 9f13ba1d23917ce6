"""Summary panel — renders the last saved session record as markdown."""

from __future__ import annotations

import pyperclip
from textual.binding import Binding
from textual.widgets import Markdown

from clinic_scribe.l1_entities.session_record import SessionRecord, render_record_markdown

_PLACEHOLDER = '*The summary appears here after **Finish & Summarize**.*'


class SummaryPanel(Markdown):
    """Scrollable display of the most recent summary."""

    can_focus = True

    DEFAULT_CSS = """
    SummaryPanel {
        height: 1fr;
        overflow-y: auto;
        border: solid $secondary;
        scrollbar-size: 1 1;
    }
    SummaryPanel:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [
        Binding('c', 'copy_content', 'Copy', show=False),
        Binding('up', 'scroll_up', 'Scroll up', show=False),
        Binding('down', 'scroll_down', 'Scroll down', show=False),
        Binding('pageup', 'page_up', 'Page up', show=False),
        Binding('pagedown', 'page_down', 'Page down', show=False),
    ]

    def __init__(self, title: str = 'Summary', **kwargs) -> None:
        super().__init__(_PLACEHOLDER, **kwargs)
        self.border_title = title
        self._current_markdown: str = ''

    @property
    def current_markdown(self) -> str:
        return self._current_markdown

    def show_record(self, record: SessionRecord) -> None:
        """Replace content with the rendered record."""
        self._current_markdown = render_record_markdown(record)
        self.update(self._current_markdown)

    def action_copy_content(self) -> None:
        """Copy summary markdown to system clipboard."""
        if not self._current_markdown:
            self.app.notify('No summary to copy', severity='warning', timeout=2)
            return
        pyperclip.copy(self._current_markdown)
        self.app.notify('Summary copied', timeout=2)

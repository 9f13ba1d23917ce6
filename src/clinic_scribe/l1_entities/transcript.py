"""Transcript text helpers."""

from __future__ import annotations

FRAGMENT_SEPARATOR = '\n\n'


def append_fragment(transcript: str, fragment: str) -> str:
    """Return *transcript* extended by *fragment*, blank-line separated."""
    if not transcript:
        return fragment
    return f'{transcript}{FRAGMENT_SEPARATOR}{fragment}'


def split_fragments(text: str) -> list[str]:
    """Split text on blank lines into non-empty, stripped fragments."""
    chunks = text.replace('\r\n', '\n').split(FRAGMENT_SEPARATOR)
    return [c.strip() for c in chunks if c.strip()]


def format_duration(minutes: int) -> str:
    """Format a minute count for display, e.g. ``Duration: 3 min``."""
    return f'Duration: {minutes} min'

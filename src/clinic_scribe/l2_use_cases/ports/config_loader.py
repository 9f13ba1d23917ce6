"""Port: settings source."""

from __future__ import annotations

from typing import Protocol


class ConfigLoader(Protocol):
    """Supplies user settings as a plain mapping; defaults and validation are applied by the caller."""

    def read(self, config_path: str | None = None) -> dict:
        """Return the user's settings, or an empty dict when none are configured."""
        ...

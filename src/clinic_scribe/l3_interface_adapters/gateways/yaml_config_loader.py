"""Gateway: YAML settings file reader — implements ConfigLoader port."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from clinic_scribe.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS

log = logging.getLogger('cs.config')


class YamlConfigLoader:
    """Reads one settings mapping: the explicit file, else the first user config that exists."""

    def __init__(self, search_paths: Sequence[Path] = DEFAULT_CONFIG_PATHS) -> None:
        self._search_paths = list(search_paths)

    def locate(self, config_path: str | None = None) -> Path | None:
        """Return the file to read, or None when no user config exists. A missing explicit file is an error."""
        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise FileNotFoundError(f'Config file not found: {path}')
            return path
        return next((p for p in self._search_paths if p.is_file()), None)

    def read(self, config_path: str | None = None) -> dict:
        path = self.locate(config_path)
        if path is None:
            log.info('No config file found, using defaults')
            return {}
        log.info('Reading config from %s', path)
        return _read_mapping(path)


def _read_mapping(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ValueError(f'Invalid YAML in {path}: {e}') from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f'{path}: expected a mapping of settings, got {type(data).__name__}')
    return data

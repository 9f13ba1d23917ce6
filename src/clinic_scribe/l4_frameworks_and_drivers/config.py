"""Application config defaults and settings assembly — lives in L4, not domain."""

from __future__ import annotations

from collections.abc import Mapping

from clinic_scribe.l1_entities.config import AppConfig
from clinic_scribe.l2_use_cases.ports.config_loader import ConfigLoader
from clinic_scribe.l4_frameworks_and_drivers.infra_config import InfraConfig

APP_CONFIG_DEFAULTS: dict = {
    'transcription': {
        'fragment_interval': 3.0,
        'tick_interval': 60.0,
    },
    'summary': {
        'model': 'gpt-oss:20b',
        'latency': 2.0,
        'timeout': 120.0,
    },
    'output': {
        'directory': './output',
    },
}


def merge_settings(base: Mapping, override: Mapping) -> dict:
    """Return *base* with *override* laid over it. Nested sections merge key by key; inputs are not modified."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_settings(current, value)
        else:
            merged[key] = value
    return merged


def build_app_config(raw: Mapping) -> AppConfig:
    """Lay *raw* user settings over defaults, then validate."""
    return AppConfig.model_validate(merge_settings(APP_CONFIG_DEFAULTS, raw))


def load_settings(
    loader: ConfigLoader,
    config_path: str | None = None,
    output_dir: str | None = None,
) -> tuple[AppConfig, InfraConfig]:
    """Read user settings once and split them into domain config and provider config.

    Raises FileNotFoundError for a missing explicit file and ValueError
    (including pydantic.ValidationError) for unusable settings.
    """
    raw = loader.read(config_path)
    if output_dir:
        raw = merge_settings(raw, {'output': {'directory': output_dir}})
    return build_app_config(raw), InfraConfig.model_validate(raw)

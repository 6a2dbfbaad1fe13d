from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

# Flat field name -> (YAML section, key within section).
_FLAT_TO_SECTION: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "opensubtitles_api_key": ("opensubtitles", "api_key"),
    "opensubtitles_base_url": ("opensubtitles", "base_url"),
    "trakt_client_id": ("trakt", "client_id"),
    "trakt_base_url": ("trakt", "base_url"),
    "imdb_suggestions_enabled": ("imdb", "suggestions_enabled"),
    "imdb_base_url": ("imdb", "base_url"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "cache_enabled": ("cache", "enabled"),
    "cache_dir": ("cache", "dir"),
    "cache_ttl_seconds": ("cache", "ttl_seconds"),
    "resolve_timeout_seconds": ("resolve", "timeout_seconds"),
}

_SECTION_KEYS: frozenset[str] = frozenset(s for s, _ in _FLAT_TO_SECTION.values())


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into *base* and return *base*.

    dict + dict deep-merges; anything else is replaced by the override.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, Mapping):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a layer (defaults/YAML/ENV/CLI) into the sectioned shape.

    Unknown keys are dropped, so a stray YAML key never reaches validation.
    """
    out: dict[str, Any] = {}

    for section in _SECTION_KEYS:
        if section in data and isinstance(data[section], Mapping):
            out[section] = dict(data[section])

    for key in ("app_name", "environment"):
        if key in data:
            out[key] = data[key]

    for flat_key, (section, section_key) in _FLAT_TO_SECTION.items():
        if flat_key in data:
            out.setdefault(section, {})
            out[section][section_key] = data[flat_key]

    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration with precedence defaults < YAML < env vars < CLI.

    Creates no files or directories.

    Raises:
        FileNotFoundError: *config_path* or *dotenv_path* does not exist.
        ValueError: the YAML document is not a mapping.
        pydantic.ValidationError: the merged configuration is invalid.
    """
    cli_overrides = cli_overrides or {}

    # .env is loaded first so it takes part in the env-var layer.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    merged = _normalize_layer(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        _deep_merge(merged, _normalize_layer(_read_yaml_config(config_path)))

    _deep_merge(merged, _normalize_layer(EnvOverrides().to_update_dict()))
    _deep_merge(merged, _normalize_layer(cli_overrides))

    return AppConfig.model_validate(merged)

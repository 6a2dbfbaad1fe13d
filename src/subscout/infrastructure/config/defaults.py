"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "subscout",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": "subscout v0.1.0",
    },
    "opensubtitles": {
        "api_key": None,
        "base_url": "https://api.opensubtitles.com/api/v1",
    },
    "trakt": {
        "client_id": None,
        "base_url": "https://api.trakt.tv",
    },
    "imdb": {
        "suggestions_enabled": True,
        "base_url": "https://v2.sg.media-imdb.com",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "enabled": True,
        "dir": "./.cache/subscout",
        "ttl_seconds": 86_400,
    },
    "resolve": {
        "timeout_seconds": 60.0,
    },
}

"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import AliasChoices, AliasPath, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _normalize_path(value: Any) -> Path:
    """Expand ``~`` in a path-like value. Never touches the filesystem."""
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class AppConfig(BaseModel):
    """Canonical application configuration (validated, final).

    YAML is sectioned (http/opensubtitles/trakt/imdb/logging/cache/resolve);
    every field also accepts its flat name. Environment variables come in
    through ``EnvOverrides`` so ``load.py`` controls precedence
    (defaults < YAML < ENV < CLI).
    """

    # General
    app_name: str = Field(default="subscout", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for provider requests.",
    )
    http_user_agent: str = Field(
        default="subscout v0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing requests (OpenSubtitles requires one).",
    )

    # OpenSubtitles (YAML section: opensubtitles.*)
    opensubtitles_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "opensubtitles_api_key",
            AliasPath("opensubtitles", "api_key"),
        ),
        description="OpenSubtitles REST API key. Hash lookup is off when unset.",
    )
    opensubtitles_base_url: str = Field(
        default="https://api.opensubtitles.com/api/v1",
        validation_alias=AliasChoices(
            "opensubtitles_base_url",
            AliasPath("opensubtitles", "base_url"),
        ),
    )

    # Trakt (YAML section: trakt.*)
    trakt_client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "trakt_client_id",
            AliasPath("trakt", "client_id"),
        ),
        description="Trakt API client ID. Cross-reference search is off when unset.",
    )
    trakt_base_url: str = Field(
        default="https://api.trakt.tv",
        validation_alias=AliasChoices(
            "trakt_base_url",
            AliasPath("trakt", "base_url"),
        ),
    )

    # IMDb suggest (YAML section: imdb.*)
    imdb_suggestions_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "imdb_suggestions_enabled",
            AliasPath("imdb", "suggestions_enabled"),
        ),
        description="Use the keyless IMDb suggestion API as last resort.",
    )
    imdb_base_url: str = Field(
        default="https://v2.sg.media-imdb.com",
        validation_alias=AliasChoices(
            "imdb_base_url",
            AliasPath("imdb", "base_url"),
        ),
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description="Log renderer (console/json). If unset, derived from environment.",
    )

    # Cache (YAML section: cache.*)
    cache_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "cache_enabled",
            AliasPath("cache", "enabled"),
        ),
        description="Cache provider responses on disk.",
    )
    cache_dir: Path = Field(
        default=Path("./.cache/subscout"),
        validation_alias=AliasChoices(
            "cache_dir",
            AliasPath("cache", "dir"),
        ),
        description="Cache directory (disk).",
    )
    cache_ttl_seconds: int = Field(
        default=86_400,
        validation_alias=AliasChoices(
            "cache_ttl_seconds",
            AliasPath("cache", "ttl_seconds"),
        ),
        description="Default cache TTL in seconds.",
    )

    # Resolution (YAML section: resolve.*)
    resolve_timeout_seconds: float = Field(
        default=60.0,
        validation_alias=AliasChoices(
            "resolve_timeout_seconds",
            AliasPath("resolve", "timeout_seconds"),
        ),
        description="Deadline for resolving one video/subtitle pair.",
    )

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("opensubtitles_api_key", "trakt_client_id", mode="before")
    @classmethod
    def _validate_credentials(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("http_timeout_seconds", "resolve_timeout_seconds")
    @classmethod
    def _validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def _validate_cache_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_ttl_seconds must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """Dump in the sectioned shape used by config.yaml. Credentials are masked."""
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "opensubtitles": {
                "api_key": "***" if self.opensubtitles_api_key else None,
                "base_url": self.opensubtitles_base_url,
            },
            "trakt": {
                "client_id": "***" if self.trakt_client_id else None,
                "base_url": self.trakt_base_url,
            },
            "imdb": {
                "suggestions_enabled": self.imdb_suggestions_enabled,
                "base_url": self.imdb_base_url,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "cache": {
                "enabled": self.cache_enabled,
                "dir": str(self.cache_dir),
                "ttl_seconds": self.cache_ttl_seconds,
            },
            "resolve": {"timeout_seconds": self.resolve_timeout_seconds},
        }


class EnvOverrides(BaseSettings):
    """Environment-variable overrides (all optional).

    ``load.py`` reads the set ``SUBSCOUT_*`` variables, merges them over
    YAML/defaults and then validates ``AppConfig``. Examples:

    - SUBSCOUT_OPENSUBTITLES_API_KEY
    - SUBSCOUT_TRAKT_CLIENT_ID
    - SUBSCOUT_LOG_LEVEL
    - SUBSCOUT_CACHE_ENABLED
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBSCOUT_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    opensubtitles_api_key: Optional[str] = None
    opensubtitles_base_url: Optional[str] = None

    trakt_client_id: Optional[str] = None
    trakt_base_url: Optional[str] = None

    imdb_suggestions_enabled: Optional[bool] = None
    imdb_base_url: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_enabled: Optional[bool] = None
    cache_dir: Optional[Path] = None
    cache_ttl_seconds: Optional[int] = None

    resolve_timeout_seconds: Optional[float] = None

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """Return only values that were actually provided (non-None)."""
        return self.model_dump(exclude_none=True)

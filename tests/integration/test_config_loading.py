"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from subscout.infrastructure.config.load import load_config

pytestmark = [pytest.mark.integration, pytest.mark.usefixtures("clean_env")]


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "subscout-test",
        "environment": "test",
        "http": {"timeout_seconds": 5.0, "user_agent": "TestAgent/1.0"},
        "opensubtitles": {"api_key": "yaml-key"},
        "trakt": {"client_id": "yaml-trakt"},
        "logging": {"level": "DEBUG", "format": "console"},
        "cache": {"dir": str(tmp_path / "cache"), "ttl_seconds": 1800},
        "unknown_section": {"x": 1},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI: pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "subscout"
        assert config.environment == "dev"
        assert config.http_timeout_seconds == 15.0
        assert config.opensubtitles_api_key is None
        assert config.trakt_client_id is None
        assert config.imdb_suggestions_enabled is True
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.cache_ttl_seconds == 86_400
        assert config.resolve_timeout_seconds == 60.0

    def test_prod_derives_json_logs(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"

    def test_creates_no_files(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        load_config()
        assert list(tmp_path.iterdir()) == []


class TestYamlOverrides:
    def test_yaml_overrides_defaults(self, yaml_config: Path, tmp_path: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "subscout-test"
        assert config.environment == "test"
        assert config.http_timeout_seconds == 5.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.opensubtitles_api_key == "yaml-key"
        assert config.trakt_client_id == "yaml-trakt"
        assert config.log_level == "DEBUG"
        assert config.cache_dir == tmp_path / "cache"
        assert config.cache_ttl_seconds == 1800

    def test_partial_yaml_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({"http": {"timeout_seconds": 99.0}}), encoding="utf-8")

        config = load_config(config_path=path)

        assert config.http_timeout_seconds == 99.0
        assert config.http_user_agent == "subscout v0.1.0"

    def test_flat_yaml_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "flat.yaml"
        path.write_text(yaml.dump({"log_level": "ERROR"}), encoding="utf-8")
        assert load_config(config_path=path).log_level == "ERROR"

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(config_path=path).app_name == "subscout"

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"resolve": {"timeout_seconds": 0}}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(config_path=path)


class TestEnvOverrides:
    def test_env_beats_yaml(
        self, yaml_config: Path, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("SUBSCOUT_OPENSUBTITLES_API_KEY", "env-key")
        clean_env.setenv("SUBSCOUT_LOG_LEVEL", "WARNING")
        clean_env.setenv("SUBSCOUT_IMDB_SUGGESTIONS_ENABLED", "false")

        config = load_config(config_path=yaml_config)

        assert config.opensubtitles_api_key == "env-key"
        assert config.trakt_client_id == "yaml-trakt"
        assert config.log_level == "WARNING"
        assert config.imdb_suggestions_enabled is False

    def test_blank_credential_disables_provider(
        self, yaml_config: Path, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("SUBSCOUT_TRAKT_CLIENT_ID", "  ")
        assert load_config(config_path=yaml_config).trakt_client_id is None

    def test_dotenv_file(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("SUBSCOUT_TRAKT_CLIENT_ID=from-dotenv\n", encoding="utf-8")
        # load_dotenv writes to os.environ; register the key so undo removes it.
        clean_env.setenv("SUBSCOUT_TRAKT_CLIENT_ID", "placeholder")
        clean_env.delenv("SUBSCOUT_TRAKT_CLIENT_ID")

        config = load_config(dotenv_path=dotenv)

        assert config.trakt_client_id == "from-dotenv"

    def test_missing_dotenv_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    def test_cli_beats_env_and_yaml(
        self, yaml_config: Path, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("SUBSCOUT_LOG_LEVEL", "WARNING")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"log_level": "ERROR", "log_format": "json"},
        )

        assert config.log_level == "ERROR"
        assert config.log_format == "json"


class TestSectionedDump:
    def test_credentials_masked(self, yaml_config: Path) -> None:
        dumped = load_config(config_path=yaml_config).to_sectioned_dict()
        assert dumped["opensubtitles"]["api_key"] == "***"
        assert dumped["trakt"]["client_id"] == "***"
        assert dumped["http"]["user_agent"] == "TestAgent/1.0"

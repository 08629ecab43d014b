"""Tests for configuration loading module."""

import json
from pathlib import Path

import pytest

from src.config import (
    ConfigError,
    load_backend_config,
    load_from_env,
    load_from_json,
)


class TestLoadFromJson:
    """Tests for load_from_json function."""

    def test_valid_config_with_all_sections(self, tmp_path: Path):
        """Load a config file with top-level and backend sections."""
        config_data = {
            "backend": "s3",
            "timeout": 30,
            "gcs": {"endpoint": "http://localhost:4443", "access_token": "tok"},
            "s3": {
                "endpoint_url": "https://s3.us-west-000.backblazeb2.com",
                "access_key": "test-key",
                "secret_key": "test-secret",
                "region": "us-west-000",
                "addressing_style": "virtual",
            },
        }
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(config_data))

        values = load_from_json(str(config_file))

        assert values == {
            "backend": "s3",
            "timeout": 30,
            "gcs_endpoint": "http://localhost:4443",
            "gcs_access_token": "tok",
            "s3_endpoint_url": "https://s3.us-west-000.backblazeb2.com",
            "s3_access_key": "test-key",
            "s3_secret_key": "test-secret",
            "s3_region": "us-west-000",
            "s3_addressing_style": "virtual",
        }

    def test_missing_file_raises_error(self, tmp_path: Path):
        """Raise ConfigError when config file doesn't exist."""
        config_file = tmp_path / "nonexistent.json"

        with pytest.raises(ConfigError, match="Config file not found"):
            load_from_json(str(config_file))

    def test_malformed_json_raises_error(self, tmp_path: Path):
        """Raise ConfigError when config file contains invalid JSON."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{ invalid json }")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_from_json(str(config_file))

    def test_non_object_section_raises_error(self, tmp_path: Path):
        """Raise ConfigError when a backend section isn't an object."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"s3": "nope"}))

        with pytest.raises(ConfigError, match="Section 's3'"):
            load_from_json(str(config_file))


class TestLoadFromEnv:
    """Tests for load_from_env function."""

    def test_reads_known_variables(self):
        """Should map environment variables to config fields."""
        environ = {
            "BENCH_BACKEND": "s3",
            "S3_ACCESS_KEY": "key",
            "S3_SECRET_KEY": "secret",
            "UNRELATED": "ignored",
        }

        values = load_from_env(environ)

        assert values == {
            "backend": "s3",
            "s3_access_key": "key",
            "s3_secret_key": "secret",
        }

    def test_empty_values_skipped(self):
        """Empty variables should be treated as unset."""
        assert load_from_env({"GCS_ACCESS_TOKEN": ""}) == {}


class TestLoadBackendConfig:
    """Tests for load_backend_config priority handling."""

    def test_defaults_without_sources(self, tmp_path: Path):
        """Should fall back to the GCS defaults."""
        config = load_backend_config(str(tmp_path / "missing.json"), environ={})

        assert config.backend == "gcs"
        assert config.gcs_endpoint == "https://storage.googleapis.com"
        assert config.gcs_access_token is None
        assert config.timeout is None

    def test_env_overrides_json(self, tmp_path: Path):
        """Environment variables take priority over the config file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"gcs": {"access_token": "from-file"}}))

        config = load_backend_config(
            str(config_file),
            environ={"GCS_ACCESS_TOKEN": "from-env"},
        )

        assert config.gcs_access_token == "from-env"

    def test_argument_overrides_env(self, tmp_path: Path):
        """An explicit backend wins over the environment."""
        config = load_backend_config(
            str(tmp_path / "missing.json"),
            backend="gcs",
            environ={"BENCH_BACKEND": "s3"},
        )

        assert config.backend == "gcs"

    def test_backend_name_case_insensitive(self, tmp_path: Path):
        """Backend names should be normalized to lower case."""
        config = load_backend_config(
            str(tmp_path / "missing.json"),
            environ={"BENCH_BACKEND": "S3"},
        )

        assert config.backend == "s3"

    def test_unknown_backend(self, tmp_path: Path):
        """Should reject backends other than gcs and s3."""
        with pytest.raises(ConfigError, match="Unknown backend 'azure'"):
            load_backend_config(str(tmp_path / "missing.json"), environ={"BENCH_BACKEND": "azure"})

    def test_timeout_parsed(self, tmp_path: Path):
        """Timeout should be converted to seconds as a float."""
        config = load_backend_config(
            str(tmp_path / "missing.json"),
            environ={"BENCH_TIMEOUT": "2.5"},
        )

        assert config.timeout == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, tmp_path: Path, value):
        """Should reject non-numeric and non-positive timeouts."""
        with pytest.raises(ConfigError, match="imeout"):
            load_backend_config(str(tmp_path / "missing.json"), environ={"BENCH_TIMEOUT": value})

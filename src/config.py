"""Configuration loading for the storage backend.

Supports two configuration sources:
1. Environment variables - take priority
2. config.json file (for local development)

Environment Variables:
    BENCH_BACKEND=gcs|s3
    BENCH_TIMEOUT=60
    GCS_ENDPOINT=https://storage.googleapis.com
    GCS_ACCESS_TOKEN=ya29....
    S3_ENDPOINT_URL=https://s3.us-west-000.backblazeb2.com
    S3_ACCESS_KEY=xxx
    S3_SECRET_KEY=xxx
    S3_REGION=us-west-000
    S3_ADDRESSING_STYLE=virtual

Example config.json:
    {
        "backend": "s3",
        "s3": {"endpoint_url": "...", "access_key": "...", "secret_key": "..."}
    }
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from src.models import BackendConfig, ConfigError

SUPPORTED_BACKENDS = ("gcs", "s3")

# Environment variable -> (config.json section, key, BackendConfig field)
ENV_FIELDS = {
    "BENCH_BACKEND": (None, "backend", "backend"),
    "BENCH_TIMEOUT": (None, "timeout", "timeout"),
    "GCS_ENDPOINT": ("gcs", "endpoint", "gcs_endpoint"),
    "GCS_ACCESS_TOKEN": ("gcs", "access_token", "gcs_access_token"),
    "S3_ENDPOINT_URL": ("s3", "endpoint_url", "s3_endpoint_url"),
    "S3_ACCESS_KEY": ("s3", "access_key", "s3_access_key"),
    "S3_SECRET_KEY": ("s3", "secret_key", "s3_secret_key"),
    "S3_REGION": ("s3", "region", "s3_region"),
    "S3_ADDRESSING_STYLE": ("s3", "addressing_style", "s3_addressing_style"),
}

__all__ = ["ConfigError", "load_from_json", "load_from_env", "load_backend_config"]


def load_from_json(config_path: str) -> dict[str, Any]:
    """Read backend settings from a JSON config file.

    Args:
        config_path: Path to the config.json file.

    Returns:
        Dictionary mapping BackendConfig field names to values.

    Raises:
        ConfigError: If the file doesn't exist or contains invalid JSON.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object")

    values: dict[str, Any] = {}
    for section, key, field_name in ENV_FIELDS.values():
        source = data if section is None else data.get(section, {})
        if not isinstance(source, dict):
            raise ConfigError(f"Section '{section}' must be a JSON object")
        if key in source:
            values[field_name] = source[key]

    return values


def load_from_env(environ: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """Read backend settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Returns:
        Dictionary mapping BackendConfig field names to values. Unset or
        empty variables are omitted.
    """
    if environ is None:
        environ = dict(os.environ)

    values: dict[str, Any] = {}
    for env_key, (_, _, field_name) in ENV_FIELDS.items():
        value = environ.get(env_key)
        if value:
            values[field_name] = value
    return values


def _parse_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout: {value!r}") from e
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout}")
    return timeout


def load_backend_config(
    config_path: str = "config.json",
    backend: Optional[str] = None,
    environ: Optional[dict[str, str]] = None,
) -> BackendConfig:
    """Load backend settings with environment priority.

    Priority order:
    1. Explicit backend argument (from the command line)
    2. Environment variables
    3. config.json file, when present
    4. Built-in defaults

    Args:
        config_path: Path to config.json (skipped if it doesn't exist).
        backend: Backend name overriding every other source.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        The resolved BackendConfig.

    Raises:
        ConfigError: If the backend is unknown or a value is malformed.
    """
    values: dict[str, Any] = {}

    if Path(config_path).exists():
        values.update(load_from_json(config_path))
    values.update(load_from_env(environ))
    if backend:
        values["backend"] = backend

    values["backend"] = str(values.get("backend", "gcs")).lower()
    if values["backend"] not in SUPPORTED_BACKENDS:
        raise ConfigError(
            f"Unknown backend '{values['backend']}'. "
            f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )
    values["timeout"] = _parse_timeout(values.get("timeout"))

    return BackendConfig(**values)

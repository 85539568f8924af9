"""Settings file support for pycrio."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from pycrio.models.config import (
    DEFAULT_BIN_PATH,
    ClientConfig,
    ImageCommand,
    ImageCommandField,
)
from pycrio.utils.errors import ConfigurationError

ENV_OVERRIDES = {
    "PYCRIO_BIN_PATH": "bin_path",
    "PYCRIO_CONFIG_PATH": "config_path",
    "PYCRIO_IMAGE_COMMAND": "image_command",
    "PYCRIO_LOG_LEVEL": "log_level",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Settings read from a pycrio YAML file."""

    bin_path: str = Field(default=DEFAULT_BIN_PATH, description="Search path for crictl")
    extra_bin_paths: list[str] = Field(
        default_factory=list, description="Directories appended to bin_path"
    )
    config_path: str | None = Field(default=None, description="crictl config file")
    image_command: ImageCommandField = Field(
        default=ImageCommand.IMG, description="Sub-command used to list images"
    )
    log_level: str = Field(default="INFO", description="Log level for the CLI")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    def to_client_config(self) -> ClientConfig:
        """Build a client configuration from these settings."""
        config = ClientConfig(
            bin_path=self.bin_path,
            config_path=self.config_path,
            image_command=self.image_command,
        )
        for path in self.extra_bin_paths:
            config.append_bin_path(path)
        return config


def get_settings_paths() -> list[Path]:
    """Get possible settings file paths, in lookup order."""
    paths = [
        Path.cwd() / ".pycrio.yaml",
        Path.cwd() / "pycrio.yaml",
    ]

    home = Path.home()
    paths.append(home / ".pycrio.yaml")
    paths.append(home / ".config" / "pycrio" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "pycrio" / "config.yaml")

    return paths


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in settings file {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Failed to read settings file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return data


def load_settings(
    settings_path: Path | str | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from file and environment.

    Args:
        settings_path: Explicit settings file. If None, searches default locations.
        environ: Environment to read overrides from, defaults to ``os.environ``

    Returns:
        Loaded settings

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    data: dict[str, Any] = {}
    if settings_path is not None:
        path = Path(settings_path)
        if not path.exists():
            raise ConfigurationError(f"Settings file not found: {settings_path}")
        data = _read_settings_file(path)
    else:
        for path in get_settings_paths():
            if path.exists():
                data = _read_settings_file(path)
                break

    if environ is None:
        environ = dict(os.environ)
    for var, key in ENV_OVERRIDES.items():
        if environ.get(var):
            data[key] = environ[var]

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        key = ".".join(str(part) for part in e.errors()[0]["loc"]) if e.errors() else None
        raise ConfigurationError(f"Invalid settings: {e}", config_key=key)

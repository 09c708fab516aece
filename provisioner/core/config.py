"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
Values come from these files, not from code.

Secrets (.env or environment):
    API_KEY, API_TOKEN

Settings (YAML):
    application.yaml   - App identity, provisioning API base URL and timeout
    logging.yaml       - Logging configuration
    features.yaml      - Feature flags
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from provisioner.core.config_schema import (
    ApplicationSchema,
    FeaturesSchema,
    LoggingSchema,
)
from provisioner.core.exceptions import ConfigurationError

ROOT_ENV_VAR = "PROVISIONER_ROOT"


def find_project_root() -> Path:
    """
    Find project root.

    PROVISIONER_ROOT wins when set; otherwise walk up from the working
    directory looking for the .project_root marker file.
    """
    override = os.environ.get(ROOT_ENV_VAR)
    if override:
        root = Path(override).expanduser()
        if not (root / ".project_root").exists():
            raise RuntimeError(f"{ROOT_ENV_VAR}={override} does not contain a .project_root file.")
        return root

    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only credentials for the provisioning API."""

    api_key: str
    api_token: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


def load_logging_settings() -> LoggingSchema:
    """
    Validated logging.yaml on its own.

    Logging is configured before any command runs, so a broken
    application.yaml or features.yaml must not stop it.
    """
    return _load_validated(LoggingSchema, "logging.yaml")


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features


@lru_cache
def get_settings() -> Settings:
    """
    Get cached secrets instance. Resolves .env path from project root.

    Raises:
        ConfigurationError: If API_KEY or API_TOKEN is missing.
    """
    env_path = find_project_root() / "config" / ".env"
    try:
        return Settings(_env_file=str(env_path))
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors())
        raise ConfigurationError(
            f"Missing provisioning API credentials ({missing}). "
            f"Set them in {env_path} or the environment."
        ) from e


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def require_app_config() -> AppConfig:
    """
    get_app_config() for command code paths.

    Raises:
        ConfigurationError: If the project root or a settings file is
            missing, or a file fails schema validation.
    """
    try:
        return get_app_config()
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        raise ConfigurationError(str(e)) from e


def get_api_base_url() -> tuple[str, float]:
    """
    Get the provisioning API base URL and timeout from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    api = require_app_config().application.api
    return api.base_url.rstrip("/"), float(api.timeout)

"""Configuration service for managing application settings."""

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog

from ..models import AppConfig

log = structlog.stdlib.get_logger()

API_USERNAME_ENV = "GAMEPAGE_API_USERNAME"
API_KEY_ENV = "GAMEPAGE_API_KEY"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "gamepage" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration.

        API credentials from the environment take precedence over the file.
        """
        return self._apply_environment(self._load_file_config())

    def _load_file_config(self) -> AppConfig:
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults", config_path=str(self.config_path))
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, Any] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ValueError: If the configuration does not validate
            OSError: If the file cannot be written
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        for name in ("api_base_url", "media_base_url"):
            value = getattr(config, name)
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(f"{name} must be an http(s) URL")

        if not isinstance(config.site_url, str):
            errors.append("site_url must be a string")
        elif config.site_url and not config.site_url.startswith(("http://", "https://")):
            errors.append("site_url must be empty or an http(s) URL")

        if not isinstance(config.request_delay, (int, float)) or config.request_delay < 0:
            errors.append("request_delay must be a non-negative number")
        elif config.request_delay > 60:
            errors.append("request_delay should not exceed 60 seconds")

        if not isinstance(config.timeout, (int, float)) or config.timeout <= 0:
            errors.append("timeout must be a positive number")
        elif config.timeout > 300:
            errors.append("timeout should not exceed 300 seconds")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if config.catalog_path is not None and not isinstance(config.catalog_path, Path):
            errors.append("catalog_path must be a Path object or None")

        if config.label_image_dir is not None and not isinstance(config.label_image_dir, Path):
            errors.append("label_image_dir must be a Path object or None")

        return ValidationResult(len(errors) == 0, errors)

    def _apply_environment(self, config: AppConfig) -> AppConfig:
        username = os.getenv(API_USERNAME_ENV)
        api_key = os.getenv(API_KEY_ENV)
        if not username and not api_key:
            return config

        log.debug("Applying API credentials from environment")
        return replace(
            config,
            api_username=username or config.api_username,
            api_key=api_key or config.api_key,
        )

    def _get_default_config(self) -> AppConfig:
        return AppConfig()

    def _config_to_dict(self, config: AppConfig) -> dict[str, Any]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "api_base_url": config.api_base_url,
            "site_url": config.site_url,
            "media_base_url": config.media_base_url,
            "api_username": config.api_username,
            "api_key": config.api_key,
            "request_delay": config.request_delay,
            "timeout": config.timeout,
            "log_level": config.log_level,
            "catalog_path": str(config.catalog_path) if config.catalog_path else None,
            "label_image_dir": str(config.label_image_dir) if config.label_image_dir else None,
        }

    def _dict_to_config(self, data: dict[str, Any]) -> AppConfig:
        """Convert dictionary to AppConfig, falling back to defaults per field."""
        defaults = self._get_default_config()

        def _str(key: str, default: str) -> str:
            value = data.get(key, default)
            return value if isinstance(value, str) else default

        def _optional_str(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) and value else None

        def _number(key: str, default: float) -> float:
            value = data.get(key, default)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return default
            return float(value)

        def _optional_path(key: str) -> Path | None:
            value = data.get(key)
            return Path(value) if isinstance(value, str) and value else None

        return AppConfig(
            api_base_url=_str("api_base_url", defaults.api_base_url),
            site_url=_str("site_url", defaults.site_url),
            media_base_url=_str("media_base_url", defaults.media_base_url),
            api_username=_optional_str("api_username"),
            api_key=_optional_str("api_key"),
            request_delay=_number("request_delay", defaults.request_delay),
            timeout=_number("timeout", defaults.timeout),
            log_level=_str("log_level", defaults.log_level).upper(),
            catalog_path=_optional_path("catalog_path"),
            label_image_dir=_optional_path("label_image_dir"),
        )

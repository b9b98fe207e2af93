"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_base_url: str = "https://retroachievements.org/API"
    site_url: str = ""  # Empty = relative links
    media_base_url: str = "https://media.retroachievements.org"
    api_username: str | None = None
    api_key: str | None = None
    request_delay: float = 1.0
    timeout: float = 30.0
    log_level: str = "INFO"
    catalog_path: Path | None = None  # Local JSON catalog instead of the web API
    label_image_dir: Path | None = None  # Directory holding {label}.png hash label images

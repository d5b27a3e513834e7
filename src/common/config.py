"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
SETTINGS_FILE = CONFIG_DIR / "settings.yaml"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class PublisherSettings(BaseModel):
    """Settings for the card publish step."""
    default_cache_ttl: int = 86400
    default_cta_action: str = "browser"
    request_timeout_seconds: float = 10.0
    model_suffix: str = ".model.json"
    publish_path_template: str = "/content/cards/{card_id}.json"


class TokenSettings(BaseModel):
    """Settings for placeholder token handling."""
    profile_prefix: str = "profile."


class Settings(BaseModel):
    """Top-level application settings."""
    publisher: PublisherSettings = Field(default_factory=PublisherSettings)
    tokens: TokenSettings = Field(default_factory=TokenSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        ``CARD_REQUEST_TIMEOUT`` and ``CARD_DEFAULT_TTL`` override the file.
        """
        settings_path = settings_path or SETTINGS_FILE
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)

        if timeout := os.getenv("CARD_REQUEST_TIMEOUT"):
            settings.publisher.request_timeout_seconds = float(timeout)
        if ttl := os.getenv("CARD_DEFAULT_TTL"):
            settings.publisher.default_cache_ttl = int(ttl)
        return settings


def get_env_credential(name: str) -> str:
    """Get a host or access token from environment, empty string if unset."""
    return os.getenv(name, "").strip()


# Singleton settings instance
settings = Settings.load()

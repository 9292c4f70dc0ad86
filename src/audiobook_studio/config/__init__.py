"""Configuration for Audiobook Studio."""

from audiobook_studio.config.pydantic_config import BaseConfig
from audiobook_studio.config.settings import Settings, settings

__all__ = ["BaseConfig", "Settings", "settings"]

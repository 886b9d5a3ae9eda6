"""Configuration module - public API.

Centralized configuration for the Calinga backend using Pydantic
BaseSettings with one section per concern.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    ServiceSettings: Remote service settings class
    CacheSettings: Local cache settings class
"""

from calinga.configuration.service import (
    DEFAULT_SERVICE_BASE_URL,
    CacheSettings,
    ServiceSettings,
)
from calinga.configuration.settings import Settings, settings

__all__ = [
    "settings",
    "Settings",
    "ServiceSettings",
    "CacheSettings",
    "DEFAULT_SERVICE_BASE_URL",
]

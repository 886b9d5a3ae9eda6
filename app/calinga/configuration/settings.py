"""Calinga backend configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from calinga.configuration.service import CacheSettings, ServiceSettings


class Settings(BaseSettings):
    """Calinga backend configuration settings - main aggregator.

    Aggregates the domain-specific settings into a single configuration
    object:

    - **service**: Remote Calinga translation service
    - **cache**: Local translation cache

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: Deployment environment name ("production" enables JSON logs)

    Example:
        ```python
        from calinga.configuration import settings

        base_url = settings.service.SERVICE_BASE_URL
        cache_backend = settings.cache.BACKEND

        if settings.is_production:
            ...
        ```
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    service: ServiceSettings
    cache: CacheSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "service": ServiceSettings,
            "cache": CacheSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()

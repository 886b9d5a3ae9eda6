"""Calinga service and cache settings."""

from typing import Literal, Optional

from pydantic import Field, field_validator

from calinga.configuration.base import InfrastructureSettings, IntegrationSettings

DEFAULT_SERVICE_BASE_URL = "https://prod.cali.conplement.cloud/api/v1/"


class ServiceSettings(IntegrationSettings):
    """Calinga translation service configuration.

    Environment Variables:
        CALINGA_SERVICE_BASE_URL: Base URL of the Calinga API
        CALINGA_ORGANIZATION: Organization path segment
        CALINGA_TEAM: Team path segment
        CALINGA_PROJECT: Project path segment
        CALINGA_API_TOKEN: Optional bearer token sent with every request
        CALINGA_INCLUDE_DRAFTS: Request draft translations as well
        CALINGA_DEV_MODE: Inject the development pseudo-language
        CALINGA_REVALIDATE: Always revalidate cached entries with their ETag
        CALINGA_REQUEST_TIMEOUT: Transport timeout in seconds

    Example:
        ```python
        from calinga.configuration import settings

        project = settings.service.PROJECT
        if settings.service.is_configured:
            ...
        ```
    """

    SERVICE_BASE_URL: str = Field(
        default=DEFAULT_SERVICE_BASE_URL, alias="CALINGA_SERVICE_BASE_URL"
    )
    ORGANIZATION: str = Field(default="", alias="CALINGA_ORGANIZATION")
    TEAM: str = Field(default="", alias="CALINGA_TEAM")
    PROJECT: str = Field(default="", alias="CALINGA_PROJECT")
    API_TOKEN: Optional[str] = Field(default=None, alias="CALINGA_API_TOKEN")
    INCLUDE_DRAFTS: bool = Field(default=False, alias="CALINGA_INCLUDE_DRAFTS")
    DEV_MODE: bool = Field(default=False, alias="CALINGA_DEV_MODE")
    REVALIDATE: bool = Field(default=False, alias="CALINGA_REVALIDATE")
    REQUEST_TIMEOUT: int = Field(default=30, alias="CALINGA_REQUEST_TIMEOUT")

    @field_validator("SERVICE_BASE_URL")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Path segments are appended directly to the base URL."""
        if v and not v.endswith("/"):
            return v + "/"
        return v

    @property
    def is_configured(self) -> bool:
        """Check whether every path segment needed to reach the service is set.

        Returns:
            True if base URL, organization, team and project are non-empty.
        """
        return all(
            [self.SERVICE_BASE_URL, self.ORGANIZATION, self.TEAM, self.PROJECT]
        )


class CacheSettings(InfrastructureSettings):
    """Local translation cache configuration.

    Environment Variables:
        CALINGA_CACHE_BACKEND: "memory", "file" or "none" (default: memory)
        CALINGA_CACHE_DIR: Directory used by the file backend
    """

    BACKEND: Literal["memory", "file", "none"] = Field(
        default="memory", alias="CALINGA_CACHE_BACKEND"
    )
    DIRECTORY: str = Field(default=".calinga-cache", alias="CALINGA_CACHE_DIR")

"""Errors raised while resolving translations."""

from typing import Optional, Sequence

from calinga.operations import OperationStatus


class CalingaError(Exception):
    """Base class for all Calinga backend errors."""


class NoFallbackAvailableError(CalingaError):
    """No resources, no cache entry and the service could not deliver."""

    def __init__(self, language: str, namespace: str):
        self.language = language
        self.namespace = namespace
        super().__init__(
            f"No fallback resources provided for {language}|{namespace}"
        )


class MalformedCacheEntryError(CalingaError):
    """A cached translation payload is not a JSON object."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        message = f"Cache entry {key} could not be parsed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ServiceUnavailableError(CalingaError):
    """The Calinga service could not be reached or answered unexpectedly.

    Attributes:
        url: Requested URL.
        error_code: Machine error code from the client (e.g. HTTP_404, TIMEOUT).
        status: Outcome classification reported by the client.
    """

    def __init__(
        self,
        url: str,
        message: str,
        error_code: Optional[str] = None,
        status: Optional[OperationStatus] = None,
    ):
        self.url = url
        self.error_code = error_code
        self.status = status
        super().__init__(f"failed loading {url}: {message}")


class CacheWriteError(CalingaError):
    """Fresh translations were fetched but could not be written to the cache."""

    def __init__(self, keys: Sequence[str], cause: Optional[BaseException] = None):
        self.keys = list(keys)
        self.cause = cause
        super().__init__(f"Failed writing cache entries {', '.join(self.keys)}")


class LanguageBootstrapError(CalingaError):
    """The list of project languages could not be fetched."""

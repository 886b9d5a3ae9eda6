"""Calinga translation resolution.

Main components:
- models: TranslationMap, ResourceStore, CacheKey, LanguageInfo
- cache: Cache interface with in-memory and file system implementations
- loader: YAMLResourceLoader for preshipped resources
- languages: LanguageRegistry and LanguageDirectory bootstrap
- backend: CalingaBackend resolver
"""

from calinga.i18n.backend import CalingaBackend, CalingaBackendOptions
from calinga.i18n.cache import Cache, FileSystemCache, InMemoryCache
from calinga.i18n.errors import (
    CacheWriteError,
    CalingaError,
    LanguageBootstrapError,
    MalformedCacheEntryError,
    NoFallbackAvailableError,
    ServiceUnavailableError,
)
from calinga.i18n.factory import create_backend, create_cache
from calinga.i18n.languages import LanguageDirectory, LanguageRegistry
from calinga.i18n.loader import YAMLResourceLoader
from calinga.i18n.models import (
    DEV_MODE_LANGUAGE,
    CacheKey,
    LanguageInfo,
    ResourceStore,
    TranslationMap,
)

__all__ = [
    "CalingaBackend",
    "CalingaBackendOptions",
    "Cache",
    "InMemoryCache",
    "FileSystemCache",
    "CalingaError",
    "NoFallbackAvailableError",
    "MalformedCacheEntryError",
    "ServiceUnavailableError",
    "CacheWriteError",
    "LanguageBootstrapError",
    "create_backend",
    "create_cache",
    "LanguageRegistry",
    "LanguageDirectory",
    "YAMLResourceLoader",
    "DEV_MODE_LANGUAGE",
    "CacheKey",
    "LanguageInfo",
    "ResourceStore",
    "TranslationMap",
]

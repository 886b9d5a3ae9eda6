"""Factory functions for creating Calinga backend components.

Wires a CalingaBackend from the configuration settings.
"""

from pathlib import Path
from typing import Optional

from calinga.i18n.backend import CalingaBackend, CalingaBackendOptions, LoadedHook
from calinga.i18n.cache import Cache, FileSystemCache, InMemoryCache
from calinga.i18n.languages import LanguageRegistry
from calinga.i18n.loader import YAMLResourceLoader
from calinga.i18n.models import ResourceStore
from calinga.logging import get_module_logger

logger = get_module_logger()


def create_cache(settings=None) -> Optional[Cache]:
    """Create the cache selected by ``settings.cache.BACKEND``.

    Returns:
        InMemoryCache, FileSystemCache or None for the "none" backend.
    """
    if settings is None:
        from calinga.configuration import settings as default_settings

        settings = default_settings

    backend = settings.cache.BACKEND
    if backend == "file":
        return FileSystemCache(Path(settings.cache.DIRECTORY))
    if backend == "memory":
        return InMemoryCache()
    return None


def create_backend(
    settings=None,
    resources: Optional[ResourceStore] = None,
    resources_dir: Optional[Path] = None,
    cache: Optional[Cache] = None,
    loaded: Optional[LoadedHook] = None,
    language_registry: Optional[LanguageRegistry] = None,
) -> CalingaBackend:
    """Create and configure a CalingaBackend.

    Args:
        settings: Settings instance (default: configuration singleton)
        resources: Preshipped translations
        resources_dir: Directory of YAML resource files, used when resources
            is not given
        cache: Cache to use instead of the one selected by settings
        loaded: Host hook notified after every service fetch
        language_registry: Registry filled by the language bootstrap

    Returns:
        CalingaBackend: Configured backend

    Usage:
        backend = create_backend(resources_dir=Path("locales"))
        translations = await backend.resolve("en", "default")
    """
    if settings is None:
        from calinga.configuration import settings as default_settings

        settings = default_settings

    if resources is None and resources_dir is not None:
        resources = YAMLResourceLoader(resources_dir).load_all()

    if cache is None:
        cache = create_cache(settings)

    options = CalingaBackendOptions.from_settings(
        settings, cache=cache, resources=resources
    )
    backend = CalingaBackend(
        options, loaded=loaded, language_registry=language_registry
    )
    logger.info(
        "backend_created",
        project=options.project,
        cache=type(cache).__name__ if cache is not None else None,
        resource_languages=len(resources or {}),
    )
    return backend

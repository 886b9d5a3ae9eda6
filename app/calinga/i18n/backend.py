"""Calinga translation backend.

Resolves the translations of a (language, namespace) pair from three tiers
in increasing precedence: preshipped resources, the local cache and the
Calinga service. Fresh service data is written back to the cache together
with its ETag.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from pydantic import ValidationError

from calinga.clients.http import CalingaServiceClient
from calinga.configuration import DEFAULT_SERVICE_BASE_URL
from calinga.i18n.cache import Cache
from calinga.i18n.errors import (
    CacheWriteError,
    MalformedCacheEntryError,
    NoFallbackAvailableError,
    ServiceUnavailableError,
)
from calinga.i18n.languages import BootstrapHandle, LanguageDirectory, LanguageRegistry
from calinga.i18n.models import (
    CacheKey,
    ResourceStore,
    TranslationMap,
    loaded_name,
    merge_translations,
    translation_map_adapter,
)
from calinga.logging import get_module_logger
from calinga.operations import OperationStatus

if TYPE_CHECKING:
    from calinga.configuration import Settings

logger = get_module_logger()

LoadedHook = Callable[[str, Optional[Exception], Optional[TranslationMap]], None]
ReadCallback = Callable[[Optional[Exception], Optional[TranslationMap]], None]


@dataclass
class CalingaBackendOptions:
    """Options of a CalingaBackend.

    Attributes:
        organization: Organization path segment of the project.
        team: Team path segment of the project.
        project: Project path segment.
        service_base_url: Base URL of the Calinga service.
        api_token: Optional bearer token.
        include_drafts: Request draft translations as well.
        dev_mode: Inject the development pseudo-language into the languages.
        revalidate: Consult the service with the stored ETag even when the
            cache holds data. When False a cache hit is served as is.
        request_timeout: Transport timeout in seconds.
        cache: Cache storing the translations returned by the service.
        resources: Preshipped translations, language -> namespace -> map.
    """

    organization: str = ""
    team: str = ""
    project: str = ""
    service_base_url: str = DEFAULT_SERVICE_BASE_URL
    api_token: Optional[str] = None
    include_drafts: bool = False
    dev_mode: bool = False
    revalidate: bool = False
    request_timeout: int = 30
    cache: Optional[Cache] = None
    resources: Optional[ResourceStore] = None

    @property
    def is_configured(self) -> bool:
        """True when every path segment needed to reach the service is set."""
        return all(
            [self.service_base_url, self.organization, self.team, self.project]
        )

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        cache: Optional[Cache] = None,
        resources: Optional[ResourceStore] = None,
    ) -> "CalingaBackendOptions":
        service = settings.service
        return cls(
            organization=service.ORGANIZATION,
            team=service.TEAM,
            project=service.PROJECT,
            service_base_url=service.SERVICE_BASE_URL,
            api_token=service.API_TOKEN,
            include_drafts=service.INCLUDE_DRAFTS,
            dev_mode=service.DEV_MODE,
            revalidate=service.REVALIDATE,
            request_timeout=service.REQUEST_TIMEOUT,
            cache=cache,
            resources=resources,
        )


class CalingaBackend:
    """Backend resolving translations from resources, cache and service.

    Creating a backend with a complete service configuration starts the
    language bootstrap in the background; its outcome is observable through
    ``languages`` subscribers or by awaiting ``language_bootstrap`` when it
    is a task.

    Usage:
        backend = CalingaBackend(
            CalingaBackendOptions(organization="acme", team="core", project="app"),
            loaded=lambda name, err, data: ...,
        )
        translations = await backend.resolve("en", "app")
    """

    type = "backend"

    def __init__(
        self,
        options: CalingaBackendOptions,
        loaded: Optional[LoadedHook] = None,
        language_registry: Optional[LanguageRegistry] = None,
        client: Optional[CalingaServiceClient] = None,
    ):
        """Initialize the backend.

        Args:
            options: Backend options.
            loaded: Host hook notified after every service fetch.
            language_registry: Registry filled by the language bootstrap.
                A private registry is created when omitted.
            client: Service client; built from options when omitted and the
                service configuration is complete.
        """
        self.options = options
        self.loaded = loaded
        self.languages = language_registry or LanguageRegistry()
        self.client = client
        if self.client is None and options.is_configured:
            self.client = CalingaServiceClient(
                organization=options.organization,
                team=options.team,
                project=options.project,
                base_url=options.service_base_url,
                api_token=options.api_token,
                timeout=options.request_timeout,
            )

        self.language_bootstrap: Optional[BootstrapHandle] = None
        if self.client is not None:
            self.language_bootstrap = LanguageDirectory(
                self.client, self.languages, dev_mode=options.dev_mode
            ).start()
        else:
            logger.warning("calinga_service_not_configured")

    async def resolve(self, language: str, namespace: str) -> TranslationMap:
        """Resolve the translations of a language and namespace.

        Args:
            language: Language identifier.
            namespace: Namespace identifier.

        Returns:
            Merged TranslationMap.

        Raises:
            MalformedCacheEntryError: If the cached payload cannot be parsed.
            CacheWriteError: If fresh data could not be written to the cache.
            NoFallbackAvailableError: If no tier could provide data.
        """
        log = logger.bind(language=language, namespace=namespace)
        key = CacheKey(namespace=namespace, language=language)

        working = self._lookup_resources(language, namespace)
        etag: Optional[str] = None

        cache = self.options.cache
        if cache is not None:
            cached = await cache.read(key.translations)
            if cached:
                working = merge_translations(working, self._parse_cached(key, cached))
                etag = await cache.read(key.etag) or None
                if not self.options.revalidate:
                    log.debug("served_from_cache")
                    return working

        if self.client is None:
            if working is not None:
                log.debug("served_without_service")
                return working
            log.error("no_fallback_available", reason="service_not_configured")
            raise NoFallbackAvailableError(language, namespace)

        return await self._fetch(language, namespace, key, working, etag)

    async def read(
        self, language: str, namespace: str, callback: ReadCallback
    ) -> None:
        """Resolve and report the outcome to ``callback(error, data)`` exactly once."""
        try:
            translations = await self.resolve(language, namespace)
        except Exception as e:  # noqa: BLE001 - reported through the callback
            callback(e, None)
            return
        callback(None, translations)

    async def _fetch(
        self,
        language: str,
        namespace: str,
        key: CacheKey,
        working: Optional[TranslationMap],
        etag: Optional[str],
    ) -> TranslationMap:
        url = self.client.translations_url(language)
        name = loaded_name(language, namespace)
        log = logger.bind(language=language, namespace=namespace, url=url)

        result = await self.client.fetch_translations(
            language, etag=etag, include_drafts=self.options.include_drafts
        )

        if not result.is_success:
            error = ServiceUnavailableError(
                url, result.message, result.error_code, status=result.status
            )
            if result.status == OperationStatus.UNAUTHORIZED:
                log.error("service_unauthorized", error_code=result.error_code)
            else:
                log.warning(
                    "service_fetch_failed",
                    status=result.status.value,
                    error_code=result.error_code,
                )
            return self._fallback(language, namespace, name, working, error)

        payload = result.data
        if payload.not_modified:
            if working is None:
                error = ServiceUnavailableError(
                    url, "not modified but no data is cached", "HTTP_304"
                )
                return self._fallback(language, namespace, name, working, error)
            log.debug("served_revalidated_cache")
            self._notify_loaded(name, None, working)
            return working

        translations = merge_translations(working, payload.translations)

        if self.options.cache is not None:
            await self._write_cache(key, payload.translations, payload.etag, name)

        log.info("served_from_service", key_count=len(translations))
        self._notify_loaded(name, None, translations)
        return translations

    def _fallback(
        self,
        language: str,
        namespace: str,
        name: str,
        working: Optional[TranslationMap],
        error: ServiceUnavailableError,
    ) -> TranslationMap:
        self._notify_loaded(name, error, None)
        if working is not None:
            logger.info(
                "served_fallback",
                language=language,
                namespace=namespace,
                error=str(error),
            )
            return working
        logger.error(
            "no_fallback_available",
            language=language,
            namespace=namespace,
            error=str(error),
        )
        raise NoFallbackAvailableError(language, namespace) from error

    async def _write_cache(
        self,
        key: CacheKey,
        translations: TranslationMap,
        etag: Optional[str],
        name: str,
    ) -> None:
        entries = {
            key.translations: json.dumps(translations),
            key.etag: etag or "",
        }
        results = await asyncio.gather(
            *(self.options.cache.write(k, v) for k, v in entries.items()),
            return_exceptions=True,
        )
        failed = [
            (k, r) for k, r in zip(entries, results) if isinstance(r, BaseException)
        ]
        if not failed:
            return

        cause = failed[0][1]
        error = CacheWriteError([k for k, _ in failed], cause=cause)
        logger.error("cache_write_failed", keys=error.keys, error=str(cause))
        self._notify_loaded(name, error, None)
        raise error from cause

    def _lookup_resources(
        self, language: str, namespace: str
    ) -> Optional[TranslationMap]:
        resources = self.options.resources
        if not resources:
            return None
        translations = resources.get(language, {}).get(namespace)
        return dict(translations) if translations is not None else None

    @staticmethod
    def _parse_cached(key: CacheKey, raw: str) -> TranslationMap:
        try:
            return translation_map_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error("malformed_cache_entry", key=key.translations, error=str(e))
            raise MalformedCacheEntryError(
                key.translations, "expected a JSON object of strings"
            ) from e

    def _notify_loaded(
        self,
        name: str,
        error: Optional[Exception],
        translations: Optional[TranslationMap],
    ) -> None:
        if self.loaded is None:
            return
        try:
            self.loaded(name, error, translations)
        except Exception as e:  # noqa: BLE001 - host hook must not break resolution
            logger.error("loaded_hook_failed", name=name, error=str(e))

    def close(self) -> None:
        """Release the HTTP session of the service client."""
        if self.client is not None:
            self.client.close()

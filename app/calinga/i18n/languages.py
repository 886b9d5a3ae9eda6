"""Registry of the languages known for a Calinga project.

The registry is an explicit object owned by the caller; share one instance
between backends only when they serve the same project. LanguageDirectory
fills it once from the languages endpoint when a backend is created.
"""

import asyncio
import threading
from typing import Callable, List, Optional, Union

from calinga.clients.http import CalingaServiceClient
from calinga.i18n.errors import LanguageBootstrapError
from calinga.i18n.models import DEV_MODE_LANGUAGE
from calinga.logging import get_module_logger

logger = get_module_logger()

LanguagesChangedCallback = Callable[[List[str]], None]
BootstrapHandle = Union["asyncio.Task[Optional[List[str]]]", threading.Thread]


class LanguageRegistry:
    """Ordered list of language names with change subscribers.

    Thread-safe: the bootstrap may complete on a worker thread.
    """

    def __init__(self, languages: Optional[List[str]] = None):
        self._languages: List[str] = list(languages or [])
        self._subscribers: List[LanguagesChangedCallback] = []
        self._lock = threading.Lock()

    @property
    def languages(self) -> List[str]:
        """Snapshot of the current language list."""
        with self._lock:
            return list(self._languages)

    def subscribe(self, callback: LanguagesChangedCallback) -> LanguagesChangedCallback:
        """Register a callback invoked with the new list on every replace().

        Returns the callback so the method can be used as a decorator.
        """
        with self._lock:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: LanguagesChangedCallback) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def reset(self, languages: List[str]) -> None:
        """Set the list without notifying subscribers."""
        with self._lock:
            self._languages = list(languages)

    def replace(self, languages: List[str]) -> None:
        """Replace the list wholesale and notify every subscriber once.

        A failing subscriber is logged and does not prevent the others
        from being notified.
        """
        with self._lock:
            self._languages = list(languages)
            subscribers = list(self._subscribers)
            snapshot = list(self._languages)

        for callback in subscribers:
            try:
                callback(list(snapshot))
            except Exception as e:  # noqa: BLE001 - subscriber code is foreign
                logger.error(
                    "language_subscriber_failed",
                    subscriber=getattr(callback, "__name__", "unknown"),
                    error=str(e),
                )


class LanguageDirectory:
    """One-shot bootstrap of a LanguageRegistry from the Calinga service.

    Attributes:
        client: Service client of the project.
        registry: Registry to fill.
        dev_mode: Whether the development pseudo-language is injected.
    """

    def __init__(
        self,
        client: CalingaServiceClient,
        registry: LanguageRegistry,
        dev_mode: bool = False,
    ):
        self.client = client
        self.registry = registry
        self.dev_mode = dev_mode

    def initial_languages(self) -> List[str]:
        return [DEV_MODE_LANGUAGE] if self.dev_mode else []

    def start(self) -> BootstrapHandle:
        """Reset the registry and run the bootstrap in the background.

        Never waits for the bootstrap. Inside a running event loop the
        bootstrap is an asyncio task; otherwise it runs on a daemon thread.

        Returns:
            The task or thread running the bootstrap.
        """
        self.registry.reset(self.initial_languages())

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            return loop.create_task(self.bootstrap())

        thread = threading.Thread(
            target=asyncio.run,
            args=(self.bootstrap(),),
            name="calinga-language-bootstrap",
            daemon=True,
        )
        thread.start()
        return thread

    async def bootstrap(self) -> Optional[List[str]]:
        """Fetch the project languages and replace the registry.

        Failures are logged only; the registry keeps its initial value.

        Returns:
            The new language list, or None if the fetch failed.
        """
        log = logger.bind(project=self.client.project, dev_mode=self.dev_mode)
        try:
            result = await self.client.fetch_languages()
        except Exception as e:  # noqa: BLE001 - the bootstrap runs detached
            error = LanguageBootstrapError(str(e))
            log.error("language_bootstrap_failed", error=str(error), exc_info=True)
            return None

        if not result.is_success:
            error = LanguageBootstrapError(result.message)
            log.error(
                "language_bootstrap_failed",
                error=str(error),
                error_code=result.error_code,
            )
            return None

        languages = [language.name for language in result.data]
        if self.dev_mode:
            languages.append(DEV_MODE_LANGUAGE)

        self.registry.replace(languages)
        log.info("language_bootstrap_completed", languages=languages)
        return languages

"""Translation cache interface and implementations.

The resolver only talks to the Cache interface; storage is up to the
implementation. Values are JSON text serialized by the caller.
"""

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from calinga.logging import get_module_logger

logger = get_module_logger()


class Cache(ABC):
    """Abstract base class for translation caches."""

    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        """Read a value from the cache.

        Args:
            key: Key that was used to store the value.

        Returns:
            The stored JSON text, or None if the key is unknown.
        """
        pass

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        """Store a value in the cache.

        Args:
            key: Cache key.
            value: JSON text to store.
        """
        pass


class InMemoryCache(Cache):
    """Process-local cache backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    async def write(self, key: str, value: str) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        """Clear all cached entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class FileSystemCache(Cache):
    """Cache storing one file per key in a directory.

    Attributes:
        directory: Directory holding the cache files, created on first write.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        logger.info("initialized_file_cache", directory=str(self.directory))

    def path_for(self, key: str) -> Path:
        """File path of a key; the key is percent-encoded into a file name."""
        return self.directory / f"{quote(key, safe='')}.json"

    async def read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def write(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        # one temporary file per write, concurrent writers of a key must not share it
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.directory,
            prefix=f"{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp.write(value)
        try:
            os.replace(tmp.name, path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def clear(self) -> None:
        """Delete all cache files."""
        if not self.directory.exists():
            return
        for path in self.directory.glob("*.json"):
            path.unlink()
        logger.info("cleared_file_cache", directory=str(self.directory))

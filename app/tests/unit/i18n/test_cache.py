"""Tests for calinga.i18n.cache module."""

import asyncio
import json

import pytest

from calinga.i18n import Cache, FileSystemCache, InMemoryCache

pytestmark = pytest.mark.unit


class TestCacheInterface:
    def test_cannot_instantiate_abstract_cache(self):
        with pytest.raises(TypeError):
            Cache()


@pytest.mark.asyncio
class TestInMemoryCache:
    async def test_read_unknown_key_returns_none(self):
        assert await InMemoryCache().read("translations:default:en") is None

    async def test_write_then_read(self):
        cache = InMemoryCache()
        await cache.write("translations:default:en", '{"a": "1"}')
        assert await cache.read("translations:default:en") == '{"a": "1"}'

    async def test_initial_entries_are_copied(self):
        initial = {"etag:default:en": '"v1"'}
        cache = InMemoryCache(initial)
        await cache.write("etag:default:en", '"v2"')
        assert initial["etag:default:en"] == '"v1"'

    async def test_clear(self):
        cache = InMemoryCache({"a": "1"})
        cache.clear()
        assert len(cache) == 0


@pytest.mark.asyncio
class TestFileSystemCache:
    async def test_read_missing_directory_returns_none(self, tmp_path):
        cache = FileSystemCache(tmp_path / "missing")
        assert await cache.read("translations:default:en") is None

    async def test_write_creates_directory(self, tmp_path):
        cache = FileSystemCache(tmp_path / "cache")
        await cache.write("translations:default:en", '{"a": "1"}')
        assert (tmp_path / "cache").is_dir()
        assert await cache.read("translations:default:en") == '{"a": "1"}'

    async def test_keys_map_to_separate_files(self, tmp_path):
        cache = FileSystemCache(tmp_path)
        await cache.write("translations:default:en", "{}")
        await cache.write("etag:default:en", '"v1"')

        assert cache.path_for("translations:default:en") != cache.path_for(
            "etag:default:en"
        )
        assert await cache.read("etag:default:en") == '"v1"'

    async def test_file_name_has_no_colons(self, tmp_path):
        cache = FileSystemCache(tmp_path)
        assert ":" not in cache.path_for("translations:default:en").name

    async def test_overwrite(self, tmp_path):
        cache = FileSystemCache(tmp_path)
        await cache.write("etag:default:en", '"v1"')
        await cache.write("etag:default:en", '"v2"')
        assert await cache.read("etag:default:en") == '"v2"'

    async def test_clear(self, tmp_path):
        cache = FileSystemCache(tmp_path)
        await cache.write("etag:default:en", '"v1"')
        cache.clear()
        assert await cache.read("etag:default:en") is None

    async def test_concurrent_writes_to_one_key(self, tmp_path):
        cache = FileSystemCache(tmp_path)
        values = [json.dumps({"origin": f"value {i}"}) for i in range(16)]

        for _ in range(20):
            await asyncio.gather(
                *(cache.write("translations:default:en", v) for v in values)
            )

        assert await cache.read("translations:default:en") in values
        assert list(tmp_path.glob("*.tmp")) == []

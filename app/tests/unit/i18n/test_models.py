"""Tests for calinga.i18n.models module."""

import pytest
from pydantic import ValidationError

from calinga.i18n.models import (
    CacheKey,
    LanguageInfo,
    language_list_adapter,
    loaded_name,
    merge_translations,
)

pytestmark = pytest.mark.unit


class TestCacheKey:
    def test_translations_key(self):
        assert CacheKey("default", "en").translations == "translations:default:en"

    def test_etag_key(self):
        assert CacheKey("default", "en").etag == "etag:default:en"

    def test_keys_use_literal_values(self):
        key = CacheKey(namespace="my-app", language="de-AT")
        assert key.translations == "translations:my-app:de-AT"
        assert key.etag == "etag:my-app:de-AT"

    def test_str_is_translations_key(self):
        assert str(CacheKey("default", "en")) == "translations:default:en"

    def test_is_hashable(self):
        assert len({CacheKey("a", "en"), CacheKey("a", "en")}) == 1


class TestLanguageInfo:
    def test_parses_wire_format(self):
        languages = language_list_adapter.validate_python(
            [{"name": "de"}, {"name": "en", "isReference": True}]
        )
        assert [language.name for language in languages] == ["de", "en"]
        assert languages[1].is_reference is True
        assert languages[0].is_reference is False

    def test_ignores_unknown_fields(self):
        info = LanguageInfo.model_validate({"name": "en", "tag": "en-US"})
        assert info.name == "en"

    def test_requires_name(self):
        with pytest.raises(ValidationError):
            LanguageInfo.model_validate({"isReference": True})


class TestHelpers:
    def test_loaded_name(self):
        assert loaded_name("en", "default") == "en|default"

    def test_merge_later_wins(self):
        assert merge_translations({"a": "1", "b": "2"}, {"b": "3", "c": "4"}) == {
            "a": "1",
            "b": "3",
            "c": "4",
        }

    def test_merge_skips_none(self):
        assert merge_translations(None, {"a": "1"}, None) == {"a": "1"}

    def test_merge_does_not_mutate_inputs(self):
        first = {"a": "1"}
        merge_translations(first, {"a": "2"})
        assert first == {"a": "1"}

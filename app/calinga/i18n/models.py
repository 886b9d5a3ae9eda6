"""Translation models for the Calinga backend.

Defines the data structures exchanged between the resolver, the cache and
the Calinga service.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

TranslationMap = Dict[str, str]
ResourceStore = Dict[str, Dict[str, TranslationMap]]

# i18next shows translation keys instead of values for this language
DEV_MODE_LANGUAGE = "cimode"


@dataclass(frozen=True)
class CacheKey:
    """Cache keys for one (namespace, language) pair.

    The format is shared with caches persisted by earlier releases and must
    not change.

    Attributes:
        namespace: Translation namespace (e.g., "default").
        language: Language identifier (e.g., "en").
    """

    namespace: str
    language: str

    @property
    def translations(self) -> str:
        """Key of the JSON-serialized TranslationMap."""
        return f"translations:{self.namespace}:{self.language}"

    @property
    def etag(self) -> str:
        """Key of the validator stored with the translations."""
        return f"etag:{self.namespace}:{self.language}"

    def __str__(self) -> str:
        return self.translations


@dataclass
class TranslationPayload:
    """Outcome of a translation fetch against the Calinga service.

    Attributes:
        translations: Parsed payload, None when the service answered 304.
        etag: Validator returned by the service, if any.
        not_modified: True when the service answered 304.
    """

    translations: Optional[TranslationMap] = None
    etag: Optional[str] = None
    not_modified: bool = False


class LanguageInfo(BaseModel):
    """Language entry returned by the languages endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    is_reference: bool = Field(default=False, alias="isReference")


language_list_adapter = TypeAdapter(List[LanguageInfo])
translation_map_adapter = TypeAdapter(TranslationMap)


def loaded_name(language: str, namespace: str) -> str:
    """Build the composite name reported to the host ``loaded`` hook.

    Returns:
        Name in the form "language|namespace".
    """
    return f"{language}|{namespace}"


def merge_translations(*maps: Optional[TranslationMap]) -> TranslationMap:
    """Shallow-merge translation maps, later maps override earlier ones.

    None entries are skipped.
    """
    merged: TranslationMap = {}
    for translations in maps:
        if translations:
            merged.update(translations)
    return merged

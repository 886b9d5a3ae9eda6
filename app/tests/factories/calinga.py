"""Test data factories for the Calinga backend.

Provides deterministic builders for:
- fake HTTP responses
- mocked service clients
- resource stores and caches
"""

import json
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock, Mock

import requests
from requests.structures import CaseInsensitiveDict

from calinga.clients.http import CalingaServiceClient
from calinga.i18n.cache import InMemoryCache
from calinga.i18n.models import CacheKey, ResourceStore
from calinga.operations import OperationResult

KEY_NAME = "origin"
LANGUAGE = "en"
NAMESPACE = "default"

FROM_RESOURCES = "from resources"
FROM_CACHE = "from cache"
FROM_SERVICE = "from service"


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
) -> Mock:
    """Create a fake requests.Response.

    Args:
        status_code: HTTP status code.
        json_body: Body serialized to JSON; ignored when text is given.
        headers: Response headers (case-insensitive).
        text: Raw body text.

    Returns:
        Mock with the Response attributes used by the client.
    """
    if text is None:
        text = "" if json_body is None else json.dumps(json_body)

    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    response.text = text
    response.content = text.encode("utf-8")

    def _json():
        return json.loads(text)

    response.json.side_effect = _json
    return response


def make_service_client(
    translations: Optional[OperationResult] = None,
    languages: Optional[OperationResult] = None,
    project: str = "app",
) -> MagicMock:
    """Create a mocked CalingaServiceClient.

    Both fetches default to a 404 error result.
    """
    not_found = OperationResult.permanent_error("Not Found", error_code="HTTP_404")
    client = MagicMock(spec=CalingaServiceClient)
    client.project = project
    client.translations_url.side_effect = (
        lambda language: f"https://api.example/v1/acme/core/{project}/languages/{language}"
    )
    client.fetch_translations = AsyncMock(return_value=translations or not_found)
    client.fetch_languages = AsyncMock(return_value=languages or not_found)
    return client


def make_resources(value: str = FROM_RESOURCES) -> ResourceStore:
    """Create a resource store with a single key for en/default."""
    return {LANGUAGE: {NAMESPACE: {KEY_NAME: value}}}


def make_cache(
    value: Optional[str] = FROM_CACHE, etag: Optional[str] = None
) -> InMemoryCache:
    """Create an in-memory cache holding en/default translations."""
    key = CacheKey(namespace=NAMESPACE, language=LANGUAGE)
    initial = {}
    if value is not None:
        initial[key.translations] = json.dumps({KEY_NAME: value})
    if etag is not None:
        initial[key.etag] = etag
    return InMemoryCache(initial)

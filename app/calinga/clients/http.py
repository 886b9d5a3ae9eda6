"""HTTP client for the Calinga translation service.

Wraps a requests session and converts every outcome into an
OperationResult, so callers never handle transport exceptions directly.
Blocking calls are exposed as coroutines through ``asyncio.to_thread``.

Usage:
    from calinga.clients.http import CalingaServiceClient

    client = CalingaServiceClient(
        base_url="https://prod.cali.conplement.cloud/api/v1/",
        organization="acme",
        team="core",
        project="app",
    )

    result = await client.fetch_translations("en", etag='"abc"')
    if result.is_success:
        payload = result.data  # TranslationPayload
"""

import asyncio
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from calinga.configuration import DEFAULT_SERVICE_BASE_URL
from calinga.i18n.interpolation import LANGUAGES_PATH, TRANSLATIONS_PATH, interpolate
from calinga.i18n.models import (
    TranslationPayload,
    language_list_adapter,
    translation_map_adapter,
)
from calinga.logging import get_module_logger
from calinga.operations import OperationResult, OperationStatus

logger = get_module_logger()

HTTP_OK = 200
HTTP_NOT_MODIFIED = 304


class CalingaServiceClient:
    """Client for the translation and languages endpoints of one project.

    Attributes:
        base_url: Base URL of the Calinga API, always ending with "/"
        organization: Organization path segment
        team: Team path segment
        project: Project path segment
        timeout: Default timeout in seconds
    """

    def __init__(
        self,
        organization: str,
        team: str,
        project: str,
        base_url: str = DEFAULT_SERVICE_BASE_URL,
        api_token: Optional[str] = None,
        timeout: int = 30,
    ) -> None:
        """Initialize the service client.

        Args:
            organization: Organization path segment
            team: Team path segment
            project: Project path segment
            base_url: Base URL of the Calinga API
            api_token: Optional bearer token sent with every request
            timeout: Default timeout for requests in seconds
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.organization = organization
        self.team = team
        self.project = project
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "calinga-backend/0.1",
                "Accept": "application/json",
            }
        )
        if api_token:
            self._session.headers["Authorization"] = f"Bearer {api_token}"
        self._logger = logger.bind(
            organization=organization, team=team, project=project
        )

    def translations_url(self, language: str) -> str:
        """Build the URL of the translations of one language."""
        return self.base_url + interpolate(
            TRANSLATIONS_PATH,
            {
                "organization": self.organization,
                "team": self.team,
                "project": self.project,
                "language": language,
            },
        )

    def languages_url(self) -> str:
        """Build the URL listing the languages of the project."""
        return self.base_url + interpolate(
            LANGUAGES_PATH,
            {
                "organization": self.organization,
                "team": self.team,
                "project": self.project,
            },
        )

    async def fetch_translations(
        self,
        language: str,
        etag: Optional[str] = None,
        include_drafts: bool = False,
    ) -> OperationResult:
        """Conditionally fetch the translations of a language.

        Args:
            language: Language identifier
            etag: Validator of the cached snapshot; sent as If-None-Match
            include_drafts: Request draft translations as well

        Returns:
            OperationResult whose data is a TranslationPayload on success
            (status 200 or 304)
        """
        return await asyncio.to_thread(
            self.fetch_translations_sync, language, etag, include_drafts
        )

    async def fetch_languages(self) -> OperationResult:
        """Fetch the languages of the project.

        Returns:
            OperationResult whose data is a list of LanguageInfo on success
        """
        return await asyncio.to_thread(self.fetch_languages_sync)

    def fetch_translations_sync(
        self,
        language: str,
        etag: Optional[str] = None,
        include_drafts: bool = False,
    ) -> OperationResult:
        """Blocking variant of fetch_translations."""
        url = self.translations_url(language)
        headers = {"If-None-Match": etag} if etag else None
        params = {"includeDrafts": "true"} if include_drafts else None

        result = self._get(url, params=params, headers=headers)
        if not result.is_success:
            return result

        response: requests.Response = result.data
        if response.status_code == HTTP_NOT_MODIFIED:
            return OperationResult.success(
                data=TranslationPayload(etag=etag, not_modified=True),
                message=f"GET {url} not modified",
            )

        try:
            translations = translation_map_adapter.validate_json(response.content)
        except ValidationError as e:
            self._logger.warning(
                "invalid_translations_payload", url=url, error=str(e)
            )
            return OperationResult.permanent_error(
                message=f"expected a JSON object of strings from {url}",
                error_code="INVALID_PAYLOAD",
            )

        return OperationResult.success(
            data=TranslationPayload(
                translations=translations, etag=response.headers.get("ETag")
            ),
            message=f"GET {url} succeeded",
        )

    def fetch_languages_sync(self) -> OperationResult:
        """Blocking variant of fetch_languages."""
        url = self.languages_url()
        result = self._get(url)
        if not result.is_success:
            return result

        response: requests.Response = result.data
        if response.status_code != HTTP_OK:
            return OperationResult.permanent_error(
                message=f"Unexpected status code: {response.status_code}",
                error_code=f"HTTP_{response.status_code}",
            )

        try:
            languages = language_list_adapter.validate_json(response.content)
        except ValidationError as e:
            self._logger.warning("invalid_languages_payload", url=url, error=str(e))
            return OperationResult.permanent_error(
                message=f"invalid languages payload from {url}",
                error_code="INVALID_PAYLOAD",
            )

        return OperationResult.success(data=languages, message=f"GET {url} succeeded")

    def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> OperationResult:
        """Send a GET request and classify the outcome.

        Args:
            url: Absolute URL
            params: Query parameters
            headers: Additional headers
            timeout: Request timeout (overrides default)

        Returns:
            OperationResult carrying the response for 200 and 304, an error
            result otherwise
        """
        timeout = timeout or self.timeout
        log = self._logger.bind(url=url)
        log.debug("calinga_http_request")

        try:
            request_headers = self._session.headers.copy()
            if headers:
                request_headers.update(headers)

            response = self._session.request(
                method="GET",
                url=url,
                params=params,
                headers=request_headers,
                timeout=timeout,
            )
        except requests.Timeout:
            log.error("calinga_http_timeout", timeout=timeout)
            return OperationResult.transient_error(
                message=f"Request timeout after {timeout}s",
                error_code="TIMEOUT",
            )
        except requests.ConnectionError as e:
            log.error("calinga_http_connection_error", error=str(e))
            return OperationResult.transient_error(
                message=f"Connection error: {str(e)}",
                error_code="CONNECTION_ERROR",
            )
        except requests.RequestException as e:
            log.error("calinga_http_unexpected_error", error=str(e), exc_info=True)
            return OperationResult.transient_error(
                message=f"Unexpected error: {str(e)}",
                error_code="UNEXPECTED_ERROR",
            )

        log = log.bind(status_code=response.status_code)

        if response.status_code in (HTTP_OK, HTTP_NOT_MODIFIED):
            log.debug("calinga_http_success")
            return OperationResult.success(data=response, message=f"GET {url}")

        error_code = f"HTTP_{response.status_code}"
        message = self._extract_error_message(response)

        if response.status_code in (401, 403):
            log.warning("calinga_http_client_error", error=message)
            return OperationResult.error(
                status=OperationStatus.UNAUTHORIZED,
                message=message,
                error_code=error_code,
            )
        if response.status_code == 404:
            log.warning("calinga_http_client_error", error=message)
            return OperationResult.error(
                status=OperationStatus.NOT_FOUND,
                message=message,
                error_code=error_code,
            )
        if 400 <= response.status_code < 500:
            log.warning("calinga_http_client_error", error=message)
            return OperationResult.permanent_error(message=message, error_code=error_code)

        log.error("calinga_http_server_error", error=message)
        return OperationResult.transient_error(message=message, error_code=error_code)

    def _extract_error_message(self, response: requests.Response) -> str:
        """Extract a human-readable error message from a response."""
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            for key in ["detail", "error", "message"]:
                if key in data:
                    return str(data[key])

        text = response.text or ""
        return text[:200] if text else f"HTTP {response.status_code}"

    def close(self) -> None:
        """Close HTTP session and release connections."""
        self._session.close()
        self._logger.debug("calinga_http_client_closed")


__all__ = ["CalingaServiceClient", "HTTP_OK", "HTTP_NOT_MODIFIED"]

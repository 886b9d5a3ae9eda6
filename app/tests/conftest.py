"""Shared fixtures for the Calinga backend test suite."""

import pytest

from calinga.operations import OperationResult
from calinga.i18n.models import LanguageInfo, TranslationPayload
from tests.factories.calinga import make_response


@pytest.fixture
def response_factory():
    """Factory building fake requests.Response objects."""
    return make_response


@pytest.fixture
def service_translations():
    """Translations returned by the fake service."""
    return {"origin": "from service"}


@pytest.fixture
def translations_ok(service_translations):
    """Successful translation fetch carrying an ETag."""
    return OperationResult.success(
        data=TranslationPayload(translations=service_translations, etag='"v2"')
    )


@pytest.fixture
def languages_ok():
    """Successful languages fetch."""
    return OperationResult.success(
        data=[
            LanguageInfo(name="de", is_reference=False),
            LanguageInfo(name="en", is_reference=True),
        ]
    )

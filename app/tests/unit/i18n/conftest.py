"""Feature-level fixtures for Calinga backend tests."""

import asyncio

import pytest
import pytest_asyncio
import yaml

from calinga.i18n import CalingaBackend, CalingaBackendOptions, LanguageRegistry
from tests.factories.calinga import make_service_client


@pytest.fixture
def loaded_calls():
    """Records every call of the host ``loaded`` hook."""
    return []


@pytest.fixture
def loaded_hook(loaded_calls):
    def _loaded(name, error, data):
        loaded_calls.append((name, error, data))

    return _loaded


@pytest_asyncio.fixture
async def backend_factory(loaded_hook):
    """Build backends around a mocked service client.

    Pending language bootstraps are awaited on teardown.
    """
    created = []

    def _make(client=None, registry=None, **option_overrides):
        options = CalingaBackendOptions(
            organization="acme", team="core", project="app", **option_overrides
        )
        backend = CalingaBackend(
            options,
            loaded=loaded_hook,
            language_registry=registry or LanguageRegistry(),
            client=client or make_service_client(),
        )
        created.append(backend)
        return backend

    yield _make

    for backend in created:
        if isinstance(backend.language_bootstrap, asyncio.Task):
            await backend.language_bootstrap


@pytest.fixture
def temp_resources_dir(tmp_path):
    """Create a directory with sample YAML resource files.

    - default.en.yml
    - default.de.yml
    - errors.en.yml
    """
    files = {
        "default.en.yml": {"origin": "from resources", "greeting": "Hello"},
        "default.de.yml": {"origin": "aus Ressourcen", "greeting": "Hallo"},
        "errors.en.yml": {"not_found": "Not found", "code": 404},
    }
    for name, content in files.items():
        with open(tmp_path / name, "w", encoding="utf-8") as f:
            yaml.dump(content, f, allow_unicode=True)

    return tmp_path

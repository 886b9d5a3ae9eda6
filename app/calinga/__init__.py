"""Calinga translation backend.

Resolves translations for a (language, namespace) pair from preshipped
resources, a local cache and the Calinga translation service.
"""

from calinga.i18n import CalingaBackend, CalingaBackendOptions, create_backend

__all__ = ["CalingaBackend", "CalingaBackendOptions", "create_backend"]

__version__ = "0.1.0"

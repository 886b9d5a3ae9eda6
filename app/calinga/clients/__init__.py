"""Clients for external services."""

from calinga.clients.http import CalingaServiceClient

__all__ = ["CalingaServiceClient"]

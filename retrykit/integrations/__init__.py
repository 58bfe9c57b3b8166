"""Integrations with external services."""

from retrykit.integrations.api_client import ApiClient

__all__ = ["ApiClient"]

"""Exceptions raised while loading and persisting provider configuration."""

from .base import NeoAuthProvidersError


class ConfigurationParseError(NeoAuthProvidersError):
    """Raised when a persisted provider configuration cannot be decoded."""

    http_status = 422


class PersistenceError(NeoAuthProvidersError):
    """Raised when the auth settings store cannot be read or written."""

    http_status = 503


class SyncGatewayNotConfiguredError(NeoAuthProvidersError):
    """Raised when no synchronization gateway is registered for a provider."""
    pass

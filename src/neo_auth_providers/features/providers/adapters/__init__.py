"""External system adapters for the providers feature."""

from .keycloak_sync import KeycloakSyncGateway

__all__ = ["KeycloakSyncGateway"]

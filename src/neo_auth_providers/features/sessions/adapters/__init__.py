"""Identity provider client adapters."""

from .keycloak_delegated_client import KeycloakDelegatedClient

__all__ = ["KeycloakDelegatedClient"]

"""Sessions feature - delegated login against an external identity provider.

The IdP client is built once from the persisted provider configuration and
shared by every login, logout and profile request of the process.
"""

from typing import Optional

from ...config.settings import AuthProviderSettings, get_settings
from ..providers.entities.protocols import AuthSettingsPersistenceProtocol
from .adapters.keycloak_delegated_client import KeycloakDelegatedClient
from .entities.protocols import DelegatedIdpClientProtocol
from .entities.user_profile import UserProfile
from .services.session_lifecycle import ClientFactory, SessionLifecycleService


def create_keycloak_session_service(
    settings_store: AuthSettingsPersistenceProtocol,
    settings: Optional[AuthProviderSettings] = None,
) -> SessionLifecycleService:
    """Create a session service that logs users in through Keycloak.

    Args:
        settings_store: Store holding the persisted Keycloak configuration
        settings: Runtime settings, read from the environment when omitted

    Returns:
        SessionLifecycleService whose client is created on first use
    """
    settings = settings or get_settings()

    def client_factory(auth_config):
        return KeycloakDelegatedClient.from_auth_config(
            auth_config,
            verify=settings.keycloak_verify_ssl,
            timeout=settings.keycloak_timeout,
        )

    return SessionLifecycleService(
        settings_store,
        client_factory,
        app_url=settings.app_url,
        login_path=settings.login_path,
    )


__all__ = [
    "ClientFactory",
    "DelegatedIdpClientProtocol",
    "KeycloakDelegatedClient",
    "SessionLifecycleService",
    "UserProfile",
    "create_keycloak_session_service",
]

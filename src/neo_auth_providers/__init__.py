"""Neo-Auth-Providers - authentication provider configuration for Neo services.

Lets an administrator switch an application between built-in accounts,
Keycloak, OAuth2 and LDAP, and signs users in through the configured
external identity provider.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    AuthProviderSettings,
    LdapEncryption,
    ProviderKind,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    NeoAuthProvidersError,

    # Provider configuration
    ConfigurationParseError,
    PersistenceError,
    SyncGatewayNotConfiguredError,

    # Identity provider
    IdentityProviderError,
    LoginFailedError,
    LogoutFailedError,
    ProfileFetchError,
    SessionBootError,

    # Utility Functions
    create_error_response,
)

from .features.providers import (
    AuthProvidersFactory,
    AuthSettings,
    ConfigDraftStore,
    ConfigNormalizer,
    FieldValidator,
    KeycloakConfig,
    LdapConfig,
    LdapPreviewGateway,
    NativeConfig,
    OAuth2Config,
    SaveOrchestrator,
    SaveResult,
    SaveState,
    SyncOutcome,
    configure_auth_settings_router,
    create_auth_providers_factory,
)

from .features.sessions import (
    KeycloakDelegatedClient,
    SessionLifecycleService,
    UserProfile,
    create_keycloak_session_service,
)

__all__ = [
    "__version__",

    # Configuration
    "AuthProviderSettings",
    "LdapEncryption",
    "ProviderKind",
    "get_settings",

    # Exceptions
    "NeoAuthProvidersError",
    "ConfigurationParseError",
    "PersistenceError",
    "SyncGatewayNotConfiguredError",
    "IdentityProviderError",
    "LoginFailedError",
    "LogoutFailedError",
    "ProfileFetchError",
    "SessionBootError",
    "create_error_response",

    # Providers
    "AuthProvidersFactory",
    "AuthSettings",
    "ConfigDraftStore",
    "ConfigNormalizer",
    "FieldValidator",
    "KeycloakConfig",
    "LdapConfig",
    "LdapPreviewGateway",
    "NativeConfig",
    "OAuth2Config",
    "SaveOrchestrator",
    "SaveResult",
    "SaveState",
    "SyncOutcome",
    "configure_auth_settings_router",
    "create_auth_providers_factory",

    # Sessions
    "KeycloakDelegatedClient",
    "SessionLifecycleService",
    "UserProfile",
    "create_keycloak_session_service",
]

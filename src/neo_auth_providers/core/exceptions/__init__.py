"""Exception hierarchy for neo-auth-providers."""

from .base import NeoAuthProvidersError, create_error_response, get_http_status_code
from .idp import (
    IdentityProviderError,
    LoginFailedError,
    LogoutFailedError,
    ProfileFetchError,
    SessionBootError,
)
from .providers import (
    ConfigurationParseError,
    PersistenceError,
    SyncGatewayNotConfiguredError,
)

__all__ = [
    "NeoAuthProvidersError",
    "create_error_response",
    "get_http_status_code",
    "IdentityProviderError",
    "LoginFailedError",
    "LogoutFailedError",
    "ProfileFetchError",
    "SessionBootError",
    "ConfigurationParseError",
    "PersistenceError",
    "SyncGatewayNotConfiguredError",
]

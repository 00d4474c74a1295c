"""Delegated identity provider exceptions."""

from .base import NeoAuthProvidersError


class IdentityProviderError(NeoAuthProvidersError):
    """Base exception for delegated IdP operations."""

    http_status = 502


class SessionBootError(IdentityProviderError):
    """Raised when the IdP client cannot be initialized."""

    http_status = 503


class LoginFailedError(IdentityProviderError):
    """Raised when a redirect login cannot be started."""
    pass


class LogoutFailedError(IdentityProviderError):
    """Raised when the IdP rejects a logout request."""
    pass


class ProfileFetchError(IdentityProviderError):
    """Raised when the user profile cannot be loaded."""
    pass

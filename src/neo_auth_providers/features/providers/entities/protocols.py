"""Protocol interfaces for the providers feature."""

from abc import abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable

from .auth_settings import AuthSettings
from .provider_config import LdapConfig
from .sync_outcome import SyncOutcome


@runtime_checkable
class AuthSettingsPersistenceProtocol(Protocol):
    """Protocol for the store that owns the authoritative auth settings."""

    @abstractmethod
    async def save(self, settings: AuthSettings) -> None:
        """Persist the active provider and its serialized configuration."""
        ...

    @abstractmethod
    async def load(self) -> Optional[AuthSettings]:
        """Load the persisted settings, or ``None`` if nothing was saved yet."""
        ...


@runtime_checkable
class ProviderSyncGatewayProtocol(Protocol):
    """Protocol for confirming a freshly persisted provider is reachable.

    Gateways take no arguments and work on whatever was most recently
    persisted.
    """

    @abstractmethod
    async def __call__(self) -> SyncOutcome:
        """Synchronize against the provider and report the outcome."""
        ...


@runtime_checkable
class ChangeListenerProtocol(Protocol):
    """Protocol for observers of the active provider."""

    @abstractmethod
    def __call__(self, settings: AuthSettings) -> None:
        """Handle a change of the active provider."""
        ...


@runtime_checkable
class LdapPreviewClientProtocol(Protocol):
    """Protocol for the LDAP "test connection" call."""

    @abstractmethod
    async def preview_ldap(self, config: LdapConfig) -> SyncOutcome:
        """Try the given LDAP settings without saving them."""
        ...


@runtime_checkable
class NotifierProtocol(Protocol):
    """Protocol for user-facing confirmations."""

    @abstractmethod
    def notify_success(self, message: str) -> None:
        """Show a success message."""
        ...


@runtime_checkable
class ModalProtocol(Protocol):
    """Protocol for opening a named dialog with a payload."""

    @abstractmethod
    def open(self, name: str, payload: Any = None) -> None:
        """Open the dialog."""
        ...

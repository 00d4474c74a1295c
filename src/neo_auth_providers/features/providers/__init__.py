"""Providers feature - choosing and configuring the authentication provider.

An application authenticates users with exactly one provider at a time:
built-in (native) accounts, Keycloak, a generic OAuth2 server or LDAP.
This module lets an administrator edit the configuration of a provider,
validate it, persist it and confirm it against the provider, falling back
to native authentication when the provider cannot be reached.

Key Components:
- ConfigNormalizer: Persisted JSON to editable draft
- FieldValidator: Required-field rules per provider
- ConfigDraftStore: Working copy of the selected provider
- SaveOrchestrator: Validate, persist, synchronize, roll back
- LdapPreviewGateway: LDAP connection test without saving
- KeycloakSyncGateway: Confirms a Keycloak configuration
- router: FastAPI endpoints under ``/auth-settings``

Usage Example:
```python
from neo_auth_providers.features.providers import (
    create_auth_providers_factory,
    configure_auth_settings_router,
)

factory = create_auth_providers_factory(
    sync_gateways={ProviderKind.LDAP: ldap_sync, ProviderKind.OAUTH2: oauth2_sync},
    ldap_preview_client=ldap_client,
)
await factory.load_current_provider()
configure_auth_settings_router(app, factory)
```
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI

from ...config.constants import ProviderKind
from ...config.settings import AuthProviderSettings, get_settings

# Core entities
from .entities.auth_settings import AuthSettings
from .entities.provider_config import (
    CONFIG_MODELS,
    KeycloakConfig,
    LdapConfig,
    NativeConfig,
    OAuth2Config,
    ProviderConfig,
    ProviderConfigBase,
    config_model_for,
    parse_port,
)
from .entities.save_result import SaveResult, SaveState
from .entities.sync_outcome import SyncOutcome
from .entities.validation_result import ValidationResult

# Protocol interfaces
from .entities.protocols import (
    AuthSettingsPersistenceProtocol,
    ChangeListenerProtocol,
    LdapPreviewClientProtocol,
    ModalProtocol,
    NotifierProtocol,
    ProviderSyncGatewayProtocol,
)

# Services
from .services.config_normalizer import ConfigNormalizer
from .services.draft_store import ConfigDraftStore
from .services.field_validator import FieldValidator
from .services.ldap_preview import LdapPreviewGateway
from .services.save_orchestrator import SaveOrchestrator

# Adapters and repositories
from .adapters.keycloak_sync import KeycloakSyncGateway
from .repositories.database_settings_repository import (
    DatabaseAuthSettingsRepository,
    create_settings_repository,
)
from .repositories.memory_settings_repository import InMemoryAuthSettingsRepository

# Routers
from .routers.auth_settings_router import (
    get_config_normalizer,
    get_ldap_preview_gateway,
    get_save_orchestrator,
    get_settings_repository,
    router,
)

logger = logging.getLogger(__name__)


class AuthProvidersFactory:
    """Factory for creating and wiring the provider configuration services.

    Keycloak is confirmed with the built-in ``KeycloakSyncGateway``; gateways
    for the other providers are supplied by the application. The factory
    tracks which provider the application currently uses and follows the
    store after every save, including a rollback to native.
    """

    def __init__(
        self,
        settings: Optional[AuthProviderSettings] = None,
        sync_gateways: Optional[Dict[ProviderKind, ProviderSyncGatewayProtocol]] = None,
        ldap_preview_client: Optional[LdapPreviewClientProtocol] = None,
        repository: Optional[AuthSettingsPersistenceProtocol] = None,
        on_change: Optional[ChangeListenerProtocol] = None,
        notifier: Optional[NotifierProtocol] = None,
        modal: Optional[ModalProtocol] = None,
    ):
        """Initialize auth providers factory."""
        self.settings = settings or get_settings()
        self.sync_gateways = dict(sync_gateways or {})
        self.ldap_preview_client = ldap_preview_client
        self.on_change = on_change
        self.notifier = notifier
        self.modal = modal

        self.current_provider = ProviderKind.NATIVE

        # Lazy-initialized services
        self._repository = repository
        self._normalizer: Optional[ConfigNormalizer] = None
        self._validator: Optional[FieldValidator] = None
        self._orchestrator: Optional[SaveOrchestrator] = None
        self._ldap_preview: Optional[LdapPreviewGateway] = None

    async def get_repository(self) -> AuthSettingsPersistenceProtocol:
        """Get or create the settings repository.

        Uses PostgreSQL when ``AUTH_DATABASE_URL`` is set, memory otherwise.
        """
        if self._repository is None:
            if self.settings.database_url:
                self._repository = await create_settings_repository(
                    self.settings.database_url,
                    table_name=self.settings.settings_table,
                    min_size=self.settings.db_pool_min_size,
                    max_size=self.settings.db_pool_max_size,
                )
            else:
                logger.warning("AUTH_DATABASE_URL not set, auth settings are kept in memory")
                self._repository = InMemoryAuthSettingsRepository()
        return self._repository

    def get_normalizer(self) -> ConfigNormalizer:
        if self._normalizer is None:
            self._normalizer = ConfigNormalizer()
        return self._normalizer

    def get_validator(self) -> FieldValidator:
        if self._validator is None:
            self._validator = FieldValidator(require_oauth2_scope=self.settings.oauth2_require_scope)
        return self._validator

    def create_draft_store(self) -> ConfigDraftStore:
        """Create a draft store; each editing session gets its own."""
        return ConfigDraftStore(normalizer=self.get_normalizer(), validator=self.get_validator())

    async def get_save_orchestrator(self) -> SaveOrchestrator:
        """Get or create the save orchestrator."""
        if self._orchestrator is None:
            repository = await self.get_repository()
            gateways = dict(self.sync_gateways)
            gateways.setdefault(
                ProviderKind.KEYCLOAK,
                KeycloakSyncGateway(
                    repository,
                    normalizer=self.get_normalizer(),
                    verify=self.settings.keycloak_verify_ssl,
                    timeout=self.settings.keycloak_timeout,
                ),
            )
            self._orchestrator = SaveOrchestrator(
                persistence=repository,
                sync_gateways=gateways,
                current_provider=lambda: self.current_provider,
                on_change=self._handle_change,
                notifier=self.notifier,
                validator=self.get_validator(),
                on_persisted=self._track_provider,
            )
        return self._orchestrator

    def get_ldap_preview(self) -> LdapPreviewGateway:
        """Get or create the LDAP preview gateway."""
        if self._ldap_preview is None:
            if self.ldap_preview_client is None:
                raise ValueError("An LDAP preview client is required for LDAP previews")
            self._ldap_preview = LdapPreviewGateway(
                self.ldap_preview_client, modal=self.modal, notifier=self.notifier
            )
        return self._ldap_preview

    async def load_current_provider(self) -> ProviderKind:
        """Read the active provider from the settings store."""
        repository = await self.get_repository()
        persisted = await repository.load()
        self.current_provider = persisted.auth_provider if persisted else ProviderKind.NATIVE
        logger.info(f"Active authentication provider: {self.current_provider.value}")
        return self.current_provider

    def _handle_change(self, settings: AuthSettings) -> None:
        if self.on_change is not None:
            self.on_change(settings)

    def _track_provider(self, settings: AuthSettings) -> None:
        # Follows the store, including rollbacks to native
        if settings.auth_provider is not self.current_provider:
            logger.info(f"Active authentication provider: {settings.auth_provider.value}")
        self.current_provider = settings.auth_provider


def create_auth_providers_factory(
    settings: Optional[AuthProviderSettings] = None,
    sync_gateways: Optional[Dict[ProviderKind, ProviderSyncGatewayProtocol]] = None,
    ldap_preview_client: Optional[LdapPreviewClientProtocol] = None,
    repository: Optional[AuthSettingsPersistenceProtocol] = None,
    on_change: Optional[ChangeListenerProtocol] = None,
) -> AuthProvidersFactory:
    """Create configured auth providers factory.

    Args:
        settings: Runtime settings, read from the environment when omitted
        sync_gateways: Synchronization gateways for OAuth2 and LDAP
        ldap_preview_client: Client used for LDAP connection tests
        repository: Settings store, chosen from settings when omitted
        on_change: Called when a save switches the active provider

    Returns:
        Configured AuthProvidersFactory instance
    """
    return AuthProvidersFactory(
        settings=settings,
        sync_gateways=sync_gateways,
        ldap_preview_client=ldap_preview_client,
        repository=repository,
        on_change=on_change,
    )


def configure_auth_settings_router(app: FastAPI, factory: AuthProvidersFactory) -> None:
    """Mount the auth settings router and bind its dependencies to ``factory``."""
    app.include_router(router)
    app.dependency_overrides[get_settings_repository] = factory.get_repository
    app.dependency_overrides[get_save_orchestrator] = factory.get_save_orchestrator
    app.dependency_overrides[get_config_normalizer] = factory.get_normalizer
    if factory.ldap_preview_client is not None:
        app.dependency_overrides[get_ldap_preview_gateway] = factory.get_ldap_preview


__all__ = [
    # Entities
    "AuthSettings",
    "CONFIG_MODELS",
    "KeycloakConfig",
    "LdapConfig",
    "NativeConfig",
    "OAuth2Config",
    "ProviderConfig",
    "ProviderConfigBase",
    "config_model_for",
    "parse_port",
    "SaveResult",
    "SaveState",
    "SyncOutcome",
    "ValidationResult",

    # Protocols
    "AuthSettingsPersistenceProtocol",
    "ChangeListenerProtocol",
    "LdapPreviewClientProtocol",
    "ModalProtocol",
    "NotifierProtocol",
    "ProviderSyncGatewayProtocol",

    # Services
    "ConfigNormalizer",
    "ConfigDraftStore",
    "FieldValidator",
    "LdapPreviewGateway",
    "SaveOrchestrator",

    # Adapters and repositories
    "KeycloakSyncGateway",
    "DatabaseAuthSettingsRepository",
    "InMemoryAuthSettingsRepository",
    "create_settings_repository",

    # Router
    "router",

    # Factory
    "AuthProvidersFactory",
    "create_auth_providers_factory",
    "configure_auth_settings_router",
]

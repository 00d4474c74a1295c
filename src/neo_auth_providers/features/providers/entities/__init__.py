"""Provider configuration entities."""

from .auth_settings import AuthSettings
from .protocols import (
    AuthSettingsPersistenceProtocol,
    ChangeListenerProtocol,
    LdapPreviewClientProtocol,
    ModalProtocol,
    NotifierProtocol,
    ProviderSyncGatewayProtocol,
)
from .save_result import SaveResult, SaveState
from .provider_config import (
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
from .sync_outcome import SyncOutcome
from .validation_result import ValidationResult

__all__ = [
    "AuthSettings",
    "AuthSettingsPersistenceProtocol",
    "ChangeListenerProtocol",
    "LdapPreviewClientProtocol",
    "ModalProtocol",
    "NotifierProtocol",
    "ProviderSyncGatewayProtocol",
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
]

"""Configuration module for neo-auth-providers."""

from .constants import (
    Defaults,
    LdapEncryption,
    ProviderKind,
    LDAP_PREVIEW_MODAL,
    LOGIN_PATH,
    MAX_PORT,
    NATIVE_CONFIG_JSON,
    PREVIEW_UNAVAILABLE_MESSAGE,
    SAVED_MESSAGE,
)
from .logging_config import (
    LogFormat,
    LoggingConfig,
    LogVerbosity,
    get_logger,
    setup_logging,
)
from .settings import AuthProviderSettings, get_settings

__all__ = [
    "Defaults",
    "LdapEncryption",
    "ProviderKind",
    "LDAP_PREVIEW_MODAL",
    "LOGIN_PATH",
    "MAX_PORT",
    "NATIVE_CONFIG_JSON",
    "PREVIEW_UNAVAILABLE_MESSAGE",
    "SAVED_MESSAGE",
    "LogFormat",
    "LoggingConfig",
    "LogVerbosity",
    "get_logger",
    "setup_logging",
    "AuthProviderSettings",
    "get_settings",
]

"""Constants and enums for neo-auth-providers.

Provider identifiers match the values stored in the persisted
``auth_provider`` column, so they must not change once released.
"""

from enum import Enum
from typing import Final


class ProviderKind(str, Enum):
    """Authentication providers an application can be switched to."""

    NATIVE = "native"
    KEYCLOAK = "keycloak"
    OAUTH2 = "oauth2"
    LDAP = "ldap"

    @property
    def requires_sync(self) -> bool:
        """Whether a saved configuration must be confirmed against the IdP."""
        return self is not ProviderKind.NATIVE


class LdapEncryption(str, Enum):
    """Transport encryption choices offered for LDAP connections."""

    NONE = "none"
    START_TLS = "starttls"
    LDAPS = "ldaps"


class Defaults:
    """Default values applied to optional provider fields."""

    # Applied when a persisted payload is loaded into a draft
    LOAD_DISABLE_LOGOUT: Final[bool] = True
    LOAD_DEFAULT_PERMISSION_ADD_SPACE: Final[bool] = False
    LOAD_ALLOW_FORMS_AUTH: Final[bool] = False

    # Applied when a draft is prepared for persistence
    SAVE_DISABLE_LOGOUT: Final[bool] = True
    SAVE_DEFAULT_PERMISSION_ADD_SPACE: Final[bool] = True


PREVIEW_UNAVAILABLE_MESSAGE: Final[str] = "Unable to connect"
SAVED_MESSAGE: Final[str] = "Saved"
NATIVE_CONFIG_JSON: Final[str] = "{}"
MAX_PORT: Final[int] = 65535
LDAP_PREVIEW_MODAL: Final[str] = "ldap-preview"
LOGIN_PATH: Final[str] = "/auth/oauth2?mode=login"

"""Pytest configuration and fixtures for neo-auth-providers tests."""

import json
import pytest
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

from neo_auth_providers.config.constants import ProviderKind
from neo_auth_providers.core.exceptions import LoginFailedError
from neo_auth_providers.features.providers.entities.auth_settings import AuthSettings
from neo_auth_providers.features.providers.entities.provider_config import (
    KeycloakConfig,
    LdapConfig,
    OAuth2Config,
)
from neo_auth_providers.features.providers.entities.sync_outcome import SyncOutcome
from neo_auth_providers.features.providers.repositories.memory_settings_repository import (
    InMemoryAuthSettingsRepository,
)
from neo_auth_providers.utils import encoding

SAMPLE_PUBLIC_KEY = "-----BEGIN PUBLIC KEY-----\nMIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIBCgKCAQEA\n-----END PUBLIC KEY-----"


class RecordingNotifier:
    """Notifier that remembers every message."""

    def __init__(self):
        self.messages: List[str] = []

    def notify_success(self, message: str) -> None:
        self.messages.append(message)


class RecordingModal:
    """Modal that remembers every dialog opened."""

    def __init__(self):
        self.opened: List[tuple] = []

    def open(self, name: str, payload: Any = None) -> None:
        self.opened.append((name, payload))


class FakeIdpClient:
    """Delegated IdP client double with call counters."""

    def __init__(self, auth_config: Optional[Dict[str, Any]] = None, token: Optional[str] = "access-token"):
        self.auth_config = auth_config or {}
        self.token = token
        self.init_calls = 0
        self.login_calls: List[str] = []
        self.logout_calls: List[Dict[str, Any]] = []
        self.completed: List[Tuple[str, Optional[str], str]] = []
        self.init_error: Optional[Exception] = None
        self.login_error: Optional[Exception] = None
        self.logout_error: Optional[Exception] = None
        self.profile: Dict[str, Any] = {}

    async def init(self) -> None:
        self.init_calls += 1
        if self.init_error is not None:
            raise self.init_error

    async def login(self, redirect_uri: str) -> str:
        self.login_calls.append(redirect_uri)
        if self.login_error is not None:
            raise self.login_error
        return f"https://idp.example.com/auth?redirect_uri={redirect_uri}"

    async def complete_login(self, code: str, state: Optional[str], redirect_uri: str) -> Dict[str, Any]:
        self.completed.append((code, state, redirect_uri))
        if state != "state-1":
            raise LoginFailedError("Login state does not match the login request")
        return {"access_token": self.token}

    async def logout(self, auth_config: Dict[str, Any]) -> None:
        self.logout_calls.append(auth_config)
        if self.logout_error is not None:
            raise self.logout_error

    async def load_user_profile(self) -> Dict[str, Any]:
        return self.profile

    def clear_token(self) -> None:
        self.token = None


@pytest.fixture
def memory_repository():
    """Empty in-memory settings repository."""
    return InMemoryAuthSettingsRepository()


@pytest.fixture
def notifier():
    """Notifier recording success messages."""
    return RecordingNotifier()


@pytest.fixture
def modal():
    """Modal recording opened dialogs."""
    return RecordingModal()


@pytest.fixture
def successful_gateway():
    """Sync gateway that always confirms the provider."""
    return AsyncMock(return_value=SyncOutcome.success("synchronized"))


@pytest.fixture
def failing_gateway():
    """Sync gateway that never reaches the provider."""
    return AsyncMock(return_value=SyncOutcome.failure("unreachable"))


@pytest.fixture
def change_listener():
    """Listener for active provider changes."""
    return MagicMock()


@pytest.fixture
def keycloak_draft():
    """Complete Keycloak draft as typed into the form."""
    return KeycloakConfig(
        url="https://kc.example.com/",
        realm="acme",
        client_id="documents",
        public_key=SAMPLE_PUBLIC_KEY,
        admin_user="admin",
        admin_password="secret",
    )


@pytest.fixture
def oauth2_draft():
    """Complete OAuth2 draft."""
    return OAuth2Config(
        auth_url="https://auth.example.com/authorize",
        token_url="https://auth.example.com/token",
        client_id="documents",
        secret="s3cret",
        scope="openid",
    )


@pytest.fixture
def ldap_draft():
    """Complete LDAP draft with the port still as typed text."""
    return LdapConfig(
        server_host="ldap.example.com",
        server_port="389",
        bind_dn="cn=admin,dc=example,dc=com",
        bind_password="secret",
        user_filter="(objectClass=person)",
        attribute_user_rdn="uid",
        attribute_user_firstname="givenName",
        attribute_user_lastname="sn",
        attribute_user_email="mail",
    )


@pytest.fixture
def persisted_keycloak():
    """Keycloak settings as they are stored after a save."""
    payload = {
        "url": "https://kc.example.com",
        "realm": "acme",
        "clientId": "documents",
        "publicKey": encoding.encode(SAMPLE_PUBLIC_KEY),
        "adminUser": "admin",
        "adminPassword": "secret",
        "group": "",
    }
    return AuthSettings(auth_provider=ProviderKind.KEYCLOAK, auth_config=json.dumps(payload))


@pytest.fixture
def fake_idp_client():
    """Delegated IdP client double."""
    return FakeIdpClient()


@pytest.fixture
def sample_public_key():
    """PEM public key text."""
    return SAMPLE_PUBLIC_KEY


@pytest.fixture
def idp_client_class():
    """Class used to build fresh IdP client doubles."""
    return FakeIdpClient

"""Tests for the config normalizer."""

import json

import pytest

from neo_auth_providers.config.constants import ProviderKind
from neo_auth_providers.core.exceptions import ConfigurationParseError
from neo_auth_providers.features.providers.entities import (
    AuthSettings,
    KeycloakConfig,
    LdapConfig,
    NativeConfig,
    OAuth2Config,
)
from neo_auth_providers.features.providers.services import ConfigNormalizer
from neo_auth_providers.utils import encoding


class TestConfigNormalizer:
    """Test turning persisted blobs into drafts."""

    @pytest.fixture
    def normalizer(self):
        return ConfigNormalizer()

    @pytest.mark.parametrize("blob", [None, "", "   "])
    def test_absent_blob_gives_defaults(self, normalizer, blob):
        """Test absent configuration yields an empty draft."""
        draft = normalizer.normalize(ProviderKind.KEYCLOAK, blob)

        assert draft == KeycloakConfig()
        assert draft.disable_logout is None

    def test_native_ignores_blob(self, normalizer):
        """Test native never reads the blob."""
        assert normalizer.normalize(ProviderKind.NATIVE, "not json") == NativeConfig()

    def test_keycloak_public_key_decoded(self, normalizer, persisted_keycloak, sample_public_key):
        """Test the stored public key is shown as plain text."""
        draft = normalizer.normalize(ProviderKind.KEYCLOAK, persisted_keycloak.auth_config)

        assert isinstance(draft, KeycloakConfig)
        assert draft.public_key == sample_public_key
        assert draft.client_id == "documents"

    def test_keycloak_load_defaults(self, normalizer, persisted_keycloak):
        """Test missing options get load-time defaults."""
        draft = normalizer.normalize(ProviderKind.KEYCLOAK, persisted_keycloak.auth_config)

        assert draft.default_permission_add_space is False
        assert draft.disable_logout is True

    def test_explicit_options_kept(self, normalizer):
        """Test stored options are not overwritten by defaults."""
        blob = json.dumps({"url": "u", "disableLogout": False, "defaultPermissionAddSpace": True})

        draft = normalizer.normalize(ProviderKind.KEYCLOAK, blob)

        assert draft.disable_logout is False
        assert draft.default_permission_add_space is True

    def test_ldap_load_defaults(self, normalizer):
        """Test LDAP forms auth is off unless stored."""
        blob = json.dumps({"serverHost": "ldap.example.com", "serverPort": 389})

        draft = normalizer.normalize(ProviderKind.LDAP, blob)

        assert isinstance(draft, LdapConfig)
        assert draft.server_port == 389
        assert draft.allow_forms_auth is False
        assert draft.disable_logout is True
        assert draft.default_permission_add_space is False

    def test_oauth2_blob(self, normalizer):
        """Test an OAuth2 blob can still be decoded directly."""
        blob = json.dumps({"authUrl": "a", "tokenUrl": "t", "clientId": "c", "secret": "s", "scope": "openid"})

        draft = normalizer.normalize(ProviderKind.OAUTH2, blob)

        assert draft == OAuth2Config(auth_url="a", token_url="t", client_id="c", secret="s", scope="openid")

    @pytest.mark.parametrize("blob", ["{not json", "[1, 2]", '"text"'])
    def test_malformed_blob_raises(self, normalizer, blob):
        """Test a damaged blob is reported, not replaced with defaults."""
        with pytest.raises(ConfigurationParseError):
            normalizer.normalize(ProviderKind.KEYCLOAK, blob)

    def test_undecodable_public_key_raises(self, normalizer):
        """Test a public key that is not Base64 is reported."""
        blob = json.dumps({"url": "u", "publicKey": "%%%"})

        with pytest.raises(ConfigurationParseError):
            normalizer.normalize(ProviderKind.KEYCLOAK, blob)

    def test_wrong_field_type_raises(self, normalizer):
        """Test model validation errors become parse errors."""
        blob = json.dumps({"url": ["not", "text"]})

        with pytest.raises(ConfigurationParseError) as exc_info:
            normalizer.normalize(ProviderKind.KEYCLOAK, blob)

        assert exc_info.value.details["provider"] == "keycloak"

    def test_selection_uses_blob_of_same_provider(self, normalizer, persisted_keycloak):
        """Test the stored blob fills the draft of its own provider."""
        draft = normalizer.for_selection(ProviderKind.KEYCLOAK, persisted_keycloak)

        assert draft.realm == "acme"

    def test_selection_of_other_provider_starts_empty(self, normalizer, persisted_keycloak):
        """Test a Keycloak blob never leaks into an LDAP draft."""
        draft = normalizer.for_selection(ProviderKind.LDAP, persisted_keycloak)

        assert draft == LdapConfig()

    def test_oauth2_selection_starts_from_defaults(self, normalizer):
        """Test a stored OAuth2 blob and its secret stay out of the draft."""
        persisted = AuthSettings(ProviderKind.OAUTH2, json.dumps({"authUrl": "x", "secret": "s"}))

        draft = normalizer.for_selection(ProviderKind.OAUTH2, persisted)

        assert draft == OAuth2Config()
        assert draft.secret == ""

    def test_selection_without_persisted_settings(self, normalizer):
        """Test selection before anything was saved."""
        assert normalizer.for_selection(ProviderKind.OAUTH2, None) == OAuth2Config()

    def test_round_trip_of_encoded_key(self, normalizer, sample_public_key):
        """Test a key stored encoded loads as the original text."""
        settings = AuthSettings(
            auth_provider=ProviderKind.KEYCLOAK,
            auth_config=json.dumps({"publicKey": encoding.encode(sample_public_key)}),
        )

        draft = normalizer.for_selection(ProviderKind.KEYCLOAK, settings)

        assert draft.public_key == sample_public_key

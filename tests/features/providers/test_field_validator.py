"""Tests for provider field validation."""

import pytest

from neo_auth_providers.config.constants import ProviderKind
from neo_auth_providers.features.providers.entities import (
    KeycloakConfig,
    LdapConfig,
    NativeConfig,
    OAuth2Config,
)
from neo_auth_providers.features.providers.services import FieldValidator, is_empty


class TestFieldValidator:
    """Test required-field rules per provider."""

    @pytest.fixture
    def validator(self):
        return FieldValidator()

    def test_is_empty(self):
        """Test whitespace counts as a value."""
        assert is_empty("")
        assert is_empty(None)
        assert not is_empty(" ")

    def test_native_always_valid(self, validator):
        """Test native has nothing to validate."""
        assert validator.validate(ProviderKind.NATIVE, NativeConfig()).is_valid

    def test_complete_keycloak_valid(self, validator, keycloak_draft):
        """Test a complete Keycloak draft passes."""
        assert validator.validate(ProviderKind.KEYCLOAK, keycloak_draft).is_valid

    @pytest.mark.parametrize("field", [
        "url", "realm", "client_id", "public_key", "admin_user", "admin_password",
    ])
    def test_keycloak_required_fields(self, validator, keycloak_draft, field):
        """Test each required Keycloak field blocks the save."""
        draft = keycloak_draft.model_copy(update={field: ""})

        result = validator.validate(ProviderKind.KEYCLOAK, draft)

        assert result.first_invalid == field
        assert result.invalid_fields == [field]

    def test_keycloak_group_optional(self, validator, keycloak_draft):
        """Test group is not required."""
        assert not validator.validate(ProviderKind.KEYCLOAK, keycloak_draft).is_invalid("group")

    def test_keycloak_field_order(self, validator):
        """Test the first invalid field follows form order."""
        result = validator.validate(ProviderKind.KEYCLOAK, KeycloakConfig(url="u"))

        assert result.first_invalid == "realm"

    def test_oauth2_empty_secret(self, validator, oauth2_draft):
        """Test an OAuth2 draft without secret is invalid."""
        draft = oauth2_draft.model_copy(update={"secret": ""})

        assert validator.validate(ProviderKind.OAUTH2, draft).first_invalid == "secret"

    def test_oauth2_scope_optional_by_default(self, validator, oauth2_draft):
        """Test scope is accepted as-is unless required."""
        draft = oauth2_draft.model_copy(update={"scope": ""})

        assert validator.validate(ProviderKind.OAUTH2, draft).is_valid

    def test_oauth2_scope_required_when_configured(self, oauth2_draft):
        """Test scope can be made mandatory."""
        draft = oauth2_draft.model_copy(update={"scope": ""})

        result = FieldValidator(require_oauth2_scope=True).validate(ProviderKind.OAUTH2, draft)

        assert result.first_invalid == "scope"

    def test_complete_ldap_valid(self, validator, ldap_draft):
        """Test a complete LDAP draft passes."""
        assert validator.validate(ProviderKind.LDAP, ldap_draft).is_valid

    @pytest.mark.parametrize("port", ["", "abc", "-1", "0"])
    def test_ldap_port_must_be_numeric(self, validator, ldap_draft, port):
        """Test a port that is not a usable number is invalid."""
        draft = ldap_draft.model_copy(update={"server_port": port})

        assert validator.validate(ProviderKind.LDAP, draft).first_invalid == "server_port"

    def test_ldap_needs_a_filter(self, validator, ldap_draft):
        """Test one of user or group filter is required."""
        draft = ldap_draft.model_copy(update={"user_filter": "", "group_filter": ""})

        assert validator.validate(ProviderKind.LDAP, draft).first_invalid == "user_filter"

    def test_ldap_group_filter_alone_is_enough(self, validator, ldap_draft):
        """Test a group filter with member attribute replaces the user filter."""
        draft = ldap_draft.model_copy(update={
            "user_filter": "",
            "group_filter": "(cn=staff)",
            "attribute_group_member": "member",
        })

        assert validator.validate(ProviderKind.LDAP, draft).is_valid

    def test_ldap_group_filter_needs_member_attribute(self, validator, ldap_draft):
        """Test a group filter without member attribute is invalid."""
        draft = ldap_draft.model_copy(update={"group_filter": "(cn=staff)"})

        result = validator.validate(ProviderKind.LDAP, draft)

        assert result.invalid_fields == ["attribute_group_member"]

    def test_validation_does_not_mutate(self, validator, ldap_draft):
        """Test validation leaves the draft untouched."""
        before = ldap_draft.model_dump()

        validator.validate(ProviderKind.LDAP, ldap_draft)

        assert ldap_draft.model_dump() == before

    def test_mismatched_draft_rejected(self, validator):
        """Test a draft of another provider is a programming error."""
        with pytest.raises(TypeError):
            validator.validate(ProviderKind.LDAP, KeycloakConfig())

    def test_check_order(self, validator):
        """Test LDAP checks are declared in form order."""
        names = [name for name, _ in validator.checks_for(ProviderKind.LDAP)]

        assert names[:3] == ["server_host", "server_port", "bind_dn"]
        assert names[-1] == "attribute_group_member"
        assert [name for name, _ in validator.checks_for(ProviderKind.NATIVE)] == []

    def test_oauth2_model_required(self, validator):
        """Test OAuth2 drafts are checked against their model."""
        with pytest.raises(TypeError):
            validator.validate(ProviderKind.OAUTH2, LdapConfig())
        assert validator.validate(ProviderKind.OAUTH2, OAuth2Config()).first_invalid == "auth_url"

"""Required-field checks for provider drafts.

Each provider declares its checks in the order a form should draw attention
to them. The checks are pure: they read the draft and never change it.
"""

from typing import Any, Callable, Dict, List, Tuple

from ....config.constants import ProviderKind
from ..entities.provider_config import (
    KeycloakConfig,
    LdapConfig,
    OAuth2Config,
    ProviderConfigBase,
    parse_port,
)
from ..entities.validation_result import ValidationResult

FieldCheck = Tuple[str, Callable[[Any], bool]]


def is_empty(value: Any) -> bool:
    """Whether a text field has no value (whitespace counts as a value)."""
    return value is None or value == ""


def _empty(name: str) -> FieldCheck:
    return name, lambda draft: is_empty(getattr(draft, name))


def _ldap_port_invalid(draft: LdapConfig) -> bool:
    return is_empty(draft.server_port) or parse_port(draft.server_port) is None


def _ldap_no_filter(draft: LdapConfig) -> bool:
    return is_empty(draft.user_filter) and is_empty(draft.group_filter)


def ldap_group_member_missing(draft: LdapConfig) -> bool:
    """A group filter needs the attribute that lists group members."""
    return not is_empty(draft.group_filter) and is_empty(draft.attribute_group_member)


KEYCLOAK_CHECKS: List[FieldCheck] = [
    _empty("url"),
    _empty("realm"),
    _empty("client_id"),
    _empty("public_key"),
    _empty("admin_user"),
    _empty("admin_password"),
]

OAUTH2_CHECKS: List[FieldCheck] = [
    _empty("auth_url"),
    _empty("token_url"),
    _empty("client_id"),
    _empty("secret"),
]

OAUTH2_SCOPE_CHECK: FieldCheck = _empty("scope")

LDAP_CHECKS: List[FieldCheck] = [
    _empty("server_host"),
    ("server_port", _ldap_port_invalid),
    _empty("bind_dn"),
    _empty("bind_password"),
    ("user_filter", _ldap_no_filter),
    _empty("attribute_user_rdn"),
    _empty("attribute_user_firstname"),
    _empty("attribute_user_lastname"),
    _empty("attribute_user_email"),
    ("attribute_group_member", ldap_group_member_missing),
]

EXPECTED_MODELS = {
    ProviderKind.KEYCLOAK: KeycloakConfig,
    ProviderKind.OAUTH2: OAuth2Config,
    ProviderKind.LDAP: LdapConfig,
}


class FieldValidator:
    """Reports which required fields of a draft are missing or malformed.

    Args:
        require_oauth2_scope: Also require a non-empty OAuth2 scope. Off by
            default, where scope is accepted as-is.
    """

    def __init__(self, require_oauth2_scope: bool = False):
        self.require_oauth2_scope = require_oauth2_scope

    def checks_for(self, kind: ProviderKind) -> List[FieldCheck]:
        """Ordered checks applied to a provider."""
        kind = ProviderKind(kind)
        if kind is ProviderKind.KEYCLOAK:
            return KEYCLOAK_CHECKS
        if kind is ProviderKind.OAUTH2:
            if self.require_oauth2_scope:
                return OAUTH2_CHECKS + [OAUTH2_SCOPE_CHECK]
            return OAUTH2_CHECKS
        if kind is ProviderKind.LDAP:
            return LDAP_CHECKS
        return []

    def validate(self, kind: ProviderKind, draft: ProviderConfigBase) -> ValidationResult:
        """Validate ``draft`` against the rules of ``kind``.

        Raises:
            TypeError: If the draft does not belong to ``kind``
        """
        kind = ProviderKind(kind)
        expected = EXPECTED_MODELS.get(kind)
        if expected is not None and not isinstance(draft, expected):
            raise TypeError(f"Expected {expected.__name__} for {kind.value}, got {type(draft).__name__}")

        fields: Dict[str, bool] = {}
        for name, check in self.checks_for(kind):
            fields[name] = check(draft)
        return ValidationResult(fields=fields)

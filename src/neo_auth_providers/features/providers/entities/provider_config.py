"""Provider configuration drafts.

Each provider has its own model; the persisted JSON uses camelCase keys
while Python code works with snake_case attributes. Optional booleans stay
``None`` until a default is explicitly merged in, so "absent" can be told
apart from an explicit ``False``.
"""

from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ....config.constants import MAX_PORT, ProviderKind


class ProviderConfigBase(BaseModel):
    """Common behaviour of all provider drafts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_strings_to_empty(cls, value: Any, info) -> Any:
        """Treat JSON ``null`` in a text field as an empty value."""
        field = cls.model_fields.get(info.field_name)
        if value is None and field is not None and isinstance(field.default, str):
            return ""
        return value

    def trimmed(self) -> "ProviderConfigBase":
        """Return a copy with surrounding whitespace removed from every text field."""
        updates = {
            name: value.strip()
            for name, value in self.__dict__.items()
            if isinstance(value, str)
        }
        return self.model_copy(update=updates)

    def to_payload(self) -> Dict[str, Any]:
        """Dictionary in persisted (camelCase) form, omitting absent options."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """JSON text in persisted form."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class NativeConfig(ProviderConfigBase):
    """Built-in authentication has nothing to configure."""


class KeycloakConfig(ProviderConfigBase):
    """Keycloak realm connection settings.

    ``public_key`` holds the decoded PEM text while the draft is edited.
    """

    url: str = ""
    realm: str = ""
    client_id: str = ""
    public_key: str = ""
    admin_user: str = ""
    admin_password: str = ""
    group: str = ""
    disable_logout: Optional[bool] = None
    default_permission_add_space: Optional[bool] = None


class OAuth2Config(ProviderConfigBase):
    """Generic OAuth2 authorization server settings."""

    auth_url: str = ""
    token_url: str = ""
    client_id: str = ""
    secret: str = ""
    scope: str = ""


class LdapConfig(ProviderConfigBase):
    """LDAP directory connection and attribute mapping settings.

    ``server_port`` may still hold the text typed by the user; it is parsed
    to an integer before persistence and before a preview.
    """

    server_host: str = ""
    server_port: Union[int, str] = ""
    bind_dn: str = Field(default="", alias="bindDN")
    bind_password: str = ""
    user_filter: str = ""
    group_filter: str = ""
    attribute_user_rdn: str = Field(default="", alias="attributeUserRDN")
    attribute_user_firstname: str = ""
    attribute_user_lastname: str = ""
    attribute_user_email: str = ""
    attribute_group_member: str = ""
    encryption_type: str = ""
    disable_logout: Optional[bool] = None
    allow_forms_auth: Optional[bool] = None
    default_permission_add_space: Optional[bool] = None

    def with_parsed_port(self) -> "LdapConfig":
        """Return a copy whose ``server_port`` is an integer."""
        return self.model_copy(update={"server_port": parse_port(self.server_port)})


ProviderConfig = Union[NativeConfig, KeycloakConfig, OAuth2Config, LdapConfig]

CONFIG_MODELS: Dict[ProviderKind, Type[ProviderConfigBase]] = {
    ProviderKind.NATIVE: NativeConfig,
    ProviderKind.KEYCLOAK: KeycloakConfig,
    ProviderKind.OAUTH2: OAuth2Config,
    ProviderKind.LDAP: LdapConfig,
}


def config_model_for(kind: ProviderKind) -> Type[ProviderConfigBase]:
    """Get the draft model class for a provider."""
    return CONFIG_MODELS[ProviderKind(kind)]


def parse_port(value: Union[int, str, None]) -> Optional[int]:
    """Parse a user-entered port, returning ``None`` when it is not a usable port.

    Leading digits are accepted (``"389 "`` and ``"389abc"`` both give 389),
    matching how the settings form has always read the field. Signed values
    other than ``+`` and numbers outside 1-65535 are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 < value <= MAX_PORT else None
    if value is None:
        return None
    text = str(value).strip()
    if text[:1] == "+":
        text = text[1:]
    digits = ""
    for char in text:
        if char not in "0123456789":
            break
        digits += char
    if not digits:
        return None
    port = int(digits)
    return port if 0 < port <= MAX_PORT else None

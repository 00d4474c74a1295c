"""Auth settings API request models."""

from typing import Any, Dict

from pydantic import BaseModel, Field

from ....config.constants import ProviderKind


class SelectProviderRequest(BaseModel):
    """Switch the form to another provider."""

    provider: ProviderKind = Field(..., description="Provider to configure")


class SaveSettingsRequest(BaseModel):
    """Save a provider configuration and make it the active provider."""

    provider: ProviderKind = Field(..., description="Provider to activate")
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider settings in camelCase form, public key as plain text",
    )


class LdapPreviewRequest(BaseModel):
    """Try LDAP settings without saving them."""

    config: Dict[str, Any] = Field(..., description="LDAP settings in camelCase form")

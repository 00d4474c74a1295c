"""Auth settings API models."""

from .requests import LdapPreviewRequest, SaveSettingsRequest, SelectProviderRequest
from .responses import ProviderDraftResponse, SaveSettingsResponse, SyncOutcomeResponse

__all__ = [
    # Request models
    "LdapPreviewRequest",
    "SaveSettingsRequest",
    "SelectProviderRequest",

    # Response models
    "ProviderDraftResponse",
    "SaveSettingsResponse",
    "SyncOutcomeResponse",
]

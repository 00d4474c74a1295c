"""Auth settings API response models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ....config.constants import ProviderKind
from ..entities.provider_config import ProviderConfigBase
from ..entities.save_result import SaveResult, SaveState
from ..entities.sync_outcome import SyncOutcome


class ProviderDraftResponse(BaseModel):
    """Provider together with the draft the form should show."""

    provider: ProviderKind = Field(..., description="Selected provider")
    config: Dict[str, Any] = Field(default_factory=dict, description="Draft in camelCase form")

    @classmethod
    def from_draft(cls, provider: ProviderKind, draft: ProviderConfigBase) -> "ProviderDraftResponse":
        return cls(provider=provider, config=draft.to_payload())


class SaveSettingsResponse(BaseModel):
    """Where a save request ended."""

    provider: ProviderKind = Field(..., description="Provider that was saved")
    state: SaveState = Field(..., description="Final stage of the save sequence")
    saved: bool = Field(..., description="Whether anything was persisted")
    invalid_field: Optional[str] = Field(None, description="First field blocking the save")
    failure_message: Optional[str] = Field(None, description="Synchronization failure, if rolled back")
    active_provider: Optional[ProviderKind] = Field(None, description="Provider in effect afterwards")

    @classmethod
    def from_result(cls, result: SaveResult) -> "SaveSettingsResponse":
        return cls(
            provider=result.provider,
            state=result.state,
            saved=result.saved,
            invalid_field=result.invalid_field,
            failure_message=result.failure_message,
            active_provider=result.active_provider,
        )


class SyncOutcomeResponse(BaseModel):
    """Result of a connection test."""

    is_error: bool = Field(..., description="Whether the connection failed")
    message: str = Field("", description="Message from the directory server")

    @classmethod
    def from_outcome(cls, outcome: SyncOutcome) -> "SyncOutcomeResponse":
        return cls(is_error=outcome.is_error, message=outcome.message)

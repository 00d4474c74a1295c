"""Outcome of a save/sync sequence."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ....config.constants import ProviderKind
from .auth_settings import AuthSettings


class SaveState(str, Enum):
    """Stages of a save/sync sequence."""

    EDITING = "editing"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    SYNCING = "syncing"
    SETTLED = "settled"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class SaveResult:
    """What happened to a save request.

    A save stopped by validation ends in ``EDITING`` with ``invalid_field``
    naming the first field that needs attention; nothing was persisted.
    """

    provider: ProviderKind
    state: SaveState
    invalid_field: Optional[str] = None
    failure_message: Optional[str] = None
    settings: Optional[AuthSettings] = None

    @property
    def aborted(self) -> bool:
        return self.state is SaveState.EDITING

    @property
    def rolled_back(self) -> bool:
        return self.state is SaveState.ROLLED_BACK

    @property
    def saved(self) -> bool:
        return self.state in (SaveState.SETTLED, SaveState.ROLLED_BACK)

    @property
    def active_provider(self) -> Optional[ProviderKind]:
        """Provider in effect once the sequence finished."""
        return self.settings.auth_provider if self.settings else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider.value,
            "state": self.state.value,
            "invalidField": self.invalid_field,
            "failureMessage": self.failure_message,
            "activeProvider": self.active_provider.value if self.active_provider else None,
        }

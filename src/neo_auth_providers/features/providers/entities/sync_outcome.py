"""Result of a provider synchronization or connection preview."""

from dataclasses import dataclass
from typing import Any, Dict

from ....config.constants import PREVIEW_UNAVAILABLE_MESSAGE


@dataclass(frozen=True)
class SyncOutcome:
    """Outcome reported by a synchronization or preview call."""

    is_error: bool
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "SyncOutcome":
        """Create a successful outcome."""
        return cls(is_error=False, message=message)

    @classmethod
    def failure(cls, message: str) -> "SyncOutcome":
        """Create a failed outcome."""
        return cls(is_error=True, message=message)

    @classmethod
    def unavailable(cls) -> "SyncOutcome":
        """Placeholder shown before any preview has been run."""
        return cls(is_error=True, message=PREVIEW_UNAVAILABLE_MESSAGE)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SyncOutcome":
        """Create outcome from a response dictionary (``isError``/``message``)."""
        is_error = data.get("isError", data.get("is_error", True))
        return cls(is_error=bool(is_error), message=str(data.get("message") or ""))

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to its wire dictionary."""
        return {"isError": self.is_error, "message": self.message}

"""Persisted authentication settings."""

from dataclasses import dataclass
from typing import Any, Dict

from ....config.constants import NATIVE_CONFIG_JSON, ProviderKind


@dataclass(frozen=True)
class AuthSettings:
    """The active provider together with its serialized configuration."""

    auth_provider: ProviderKind
    auth_config: str = NATIVE_CONFIG_JSON

    def __post_init__(self):
        """Coerce the provider to its enum form."""
        object.__setattr__(self, "auth_provider", ProviderKind(self.auth_provider))

    @classmethod
    def native(cls) -> "AuthSettings":
        """Settings for the built-in provider."""
        return cls(auth_provider=ProviderKind.NATIVE, auth_config=NATIVE_CONFIG_JSON)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to the dictionary sent to observers."""
        return {
            "authProvider": self.auth_provider.value,
            "authConfig": self.auth_config,
        }

"""Canonical user profile."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserProfile:
    """User profile normalized from whatever shape the IdP returns."""

    remote_id: Optional[str]
    email: str
    username: str
    firstname: Optional[str]
    lastname: Optional[str]
    enabled: bool
    token: Optional[str] = None
    domain: str = ""

    @classmethod
    def from_idp_profile(cls, profile: Dict[str, Any], token: Optional[str] = None) -> "UserProfile":
        """Map a raw IdP profile.

        ``remote_id`` falls back from ``id`` to ``email``; first and last
        name fall back to the username; accounts are enabled unless the
        profile says otherwise.
        """
        username = _or_default(profile.get("username"), "")
        return cls(
            remote_id=_or_default(profile.get("id"), profile.get("email")),
            email=_or_default(profile.get("email"), ""),
            username=username,
            firstname=_or_default(profile.get("firstName"), profile.get("username")),
            lastname=_or_default(profile.get("lastName"), profile.get("username")),
            enabled=_or_default(profile.get("enabled"), True),
            token=token,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to its wire dictionary."""
        return {
            "domain": self.domain,
            "token": self.token,
            "remoteId": self.remote_id,
            "email": self.email,
            "username": self.username,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "enabled": self.enabled,
        }


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value

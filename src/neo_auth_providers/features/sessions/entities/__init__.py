"""Session entities."""

from .protocols import DelegatedIdpClientProtocol
from .user_profile import UserProfile

__all__ = ["DelegatedIdpClientProtocol", "UserProfile"]

"""Session services."""

from .session_lifecycle import ClientFactory, SessionLifecycleService

__all__ = ["ClientFactory", "SessionLifecycleService"]

"""Auth settings persistence."""

from .database_settings_repository import DatabaseAuthSettingsRepository, create_settings_repository
from .memory_settings_repository import InMemoryAuthSettingsRepository

__all__ = [
    "DatabaseAuthSettingsRepository",
    "InMemoryAuthSettingsRepository",
    "create_settings_repository",
]

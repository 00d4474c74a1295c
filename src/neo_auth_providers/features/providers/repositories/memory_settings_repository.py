"""In-memory auth settings store."""

import logging
from typing import List, Optional

from ..entities.auth_settings import AuthSettings

logger = logging.getLogger(__name__)


class InMemoryAuthSettingsRepository:
    """Keeps auth settings in process memory.

    Useful for tests and single-process deployments. Every saved value is
    kept in ``history`` so callers can inspect the order of writes.
    """

    def __init__(self, initial: Optional[AuthSettings] = None):
        self._current: Optional[AuthSettings] = initial
        self.history: List[AuthSettings] = []

    async def save(self, settings: AuthSettings) -> None:
        self._current = settings
        self.history.append(settings)
        logger.debug(f"Stored auth settings in memory: {settings.auth_provider.value}")

    async def load(self) -> Optional[AuthSettings]:
        return self._current

"""PostgreSQL auth settings store."""

import logging
import re
from typing import Optional

import asyncpg

from ....config.constants import ProviderKind
from ....core.exceptions import ConfigurationParseError, PersistenceError
from ..entities.auth_settings import AuthSettings

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*(\.[a-z_][a-z0-9_]*)?$")


class DatabaseAuthSettingsRepository:
    """Stores the active provider in a single-row table.

    The table is created on demand::

        CREATE TABLE auth_settings (
            id            SMALLINT PRIMARY KEY,
            auth_provider TEXT NOT NULL,
            auth_config   TEXT NOT NULL,
            updated_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """

    ROW_ID = 1

    def __init__(self, pool: asyncpg.Pool, table_name: str = "auth_settings"):
        """Initialize repository.

        Args:
            pool: asyncpg connection pool
            table_name: Table name, optionally schema-qualified
        """
        if not pool:
            raise ValueError("Database pool is required")
        self.pool = pool
        self.table_name = self._validate_table_name(table_name)

    def _validate_table_name(self, table_name: str) -> str:
        """Validate table name to prevent SQL injection."""
        if _IDENTIFIER.match(table_name):
            return table_name
        raise ValueError(f"Invalid table name: {table_name}")

    async def ensure_table(self) -> None:
        """Create the settings table if it does not exist."""
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self.table_name} (
                        id SMALLINT PRIMARY KEY,
                        auth_provider TEXT NOT NULL,
                        auth_config TEXT NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to create {self.table_name}: {e}")
            raise PersistenceError(f"Cannot create auth settings table: {e}") from e

    async def save(self, settings: AuthSettings) -> None:
        """Upsert the active provider and its configuration."""
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO {self.table_name} (id, auth_provider, auth_config, updated_at)
                    VALUES ($1, $2, $3, NOW())
                    ON CONFLICT (id) DO UPDATE
                    SET auth_provider = EXCLUDED.auth_provider,
                        auth_config = EXCLUDED.auth_config,
                        updated_at = NOW()
                    """,
                    self.ROW_ID,
                    settings.auth_provider.value,
                    settings.auth_config,
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to save auth settings: {e}")
            raise PersistenceError(
                f"Cannot save auth settings: {e}",
                details={"provider": settings.auth_provider.value},
            ) from e

        logger.info(f"Saved auth settings: provider={settings.auth_provider.value}")

    async def load(self) -> Optional[AuthSettings]:
        """Load the stored settings, or ``None`` when nothing was saved."""
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT auth_provider, auth_config FROM {self.table_name} WHERE id = $1",
                    self.ROW_ID,
                )
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to load auth settings: {e}")
            raise PersistenceError(f"Cannot load auth settings: {e}") from e

        if row is None:
            return None

        try:
            provider = ProviderKind(row["auth_provider"])
        except ValueError as e:
            raise ConfigurationParseError(
                f"Unknown auth provider stored: {row['auth_provider']}",
                details={"provider": row["auth_provider"]},
            ) from e

        return AuthSettings(auth_provider=provider, auth_config=row["auth_config"] or "")


async def create_settings_repository(
    database_url: str,
    table_name: str = "auth_settings",
    min_size: int = 1,
    max_size: int = 5,
) -> DatabaseAuthSettingsRepository:
    """Open a pool, make sure the table exists and return the repository."""
    try:
        pool = await asyncpg.create_pool(database_url, min_size=min_size, max_size=max_size)
    except (OSError, asyncpg.PostgresError) as e:
        logger.error(f"Failed to connect to auth settings database: {e}")
        raise PersistenceError(f"Cannot connect to auth settings database: {e}") from e

    repository = DatabaseAuthSettingsRepository(pool, table_name=table_name)
    await repository.ensure_table()
    return repository

"""Tests for auth settings repositories."""

import asyncpg
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from neo_auth_providers.config.constants import ProviderKind
from neo_auth_providers.core.exceptions import ConfigurationParseError, PersistenceError
from neo_auth_providers.features.providers.entities import AuthSettings
from neo_auth_providers.features.providers.repositories import (
    DatabaseAuthSettingsRepository,
    InMemoryAuthSettingsRepository,
    create_settings_repository,
)


@pytest.fixture
def mock_connection():
    """Mock asyncpg connection."""
    conn = MagicMock()
    conn.execute = AsyncMock()
    conn.fetchrow = AsyncMock()
    return conn


@pytest.fixture
def mock_pool(mock_connection):
    """Mock asyncpg pool whose acquire() yields the mock connection."""
    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_connection)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    return pool


class TestInMemoryAuthSettingsRepository:
    """Test the in-memory store."""

    @pytest.mark.asyncio
    async def test_load_empty(self):
        """Test nothing is loaded before the first save."""
        assert await InMemoryAuthSettingsRepository().load() is None

    @pytest.mark.asyncio
    async def test_save_and_load(self):
        """Test the last saved settings win."""
        repository = InMemoryAuthSettingsRepository(initial=AuthSettings.native())

        await repository.save(AuthSettings(ProviderKind.LDAP, '{"serverPort": 389}'))

        loaded = await repository.load()
        assert loaded.auth_provider is ProviderKind.LDAP
        assert len(repository.history) == 1


class TestDatabaseAuthSettingsRepository:
    """Test the PostgreSQL store."""

    def test_requires_pool(self):
        """Test a pool is mandatory."""
        with pytest.raises(ValueError):
            DatabaseAuthSettingsRepository(None)

    @pytest.mark.parametrize("table_name", ["auth settings", "x; DROP TABLE users", "Auth"])
    def test_rejects_unsafe_table_names(self, mock_pool, table_name):
        """Test table names are validated before use in SQL."""
        with pytest.raises(ValueError):
            DatabaseAuthSettingsRepository(mock_pool, table_name=table_name)

    def test_accepts_schema_qualified_table(self, mock_pool):
        """Test a schema-qualified table name."""
        repository = DatabaseAuthSettingsRepository(mock_pool, table_name="admin.auth_settings")

        assert repository.table_name == "admin.auth_settings"

    @pytest.mark.asyncio
    async def test_save_upserts_single_row(self, mock_pool, mock_connection):
        """Test saving writes row 1 with provider and config."""
        repository = DatabaseAuthSettingsRepository(mock_pool)

        await repository.save(AuthSettings(ProviderKind.KEYCLOAK, '{"realm": "acme"}'))

        query, row_id, provider, config = mock_connection.execute.call_args.args
        assert "ON CONFLICT (id) DO UPDATE" in query
        assert (row_id, provider, config) == (1, "keycloak", '{"realm": "acme"}')

    @pytest.mark.asyncio
    async def test_load_row(self, mock_pool, mock_connection):
        """Test a stored row becomes AuthSettings."""
        mock_connection.fetchrow.return_value = {"auth_provider": "oauth2", "auth_config": '{"secret": "s"}'}
        repository = DatabaseAuthSettingsRepository(mock_pool)

        loaded = await repository.load()

        assert loaded == AuthSettings(ProviderKind.OAUTH2, '{"secret": "s"}')

    @pytest.mark.asyncio
    async def test_load_missing_row(self, mock_pool, mock_connection):
        """Test an empty table loads as None."""
        mock_connection.fetchrow.return_value = None

        assert await DatabaseAuthSettingsRepository(mock_pool).load() is None

    @pytest.mark.asyncio
    async def test_load_unknown_provider(self, mock_pool, mock_connection):
        """Test an unknown provider value is a parse error."""
        mock_connection.fetchrow.return_value = {"auth_provider": "saml", "auth_config": "{}"}

        with pytest.raises(ConfigurationParseError):
            await DatabaseAuthSettingsRepository(mock_pool).load()

    @pytest.mark.asyncio
    async def test_database_errors_become_persistence_errors(self, mock_pool, mock_connection):
        """Test driver errors are wrapped."""
        mock_connection.execute.side_effect = asyncpg.PostgresError("connection lost")
        mock_connection.fetchrow.side_effect = asyncpg.PostgresError("connection lost")
        repository = DatabaseAuthSettingsRepository(mock_pool)

        with pytest.raises(PersistenceError):
            await repository.save(AuthSettings.native())
        with pytest.raises(PersistenceError):
            await repository.load()
        with pytest.raises(PersistenceError):
            await repository.ensure_table()

    @pytest.mark.asyncio
    async def test_create_settings_repository(self, mock_pool, mock_connection):
        """Test the factory opens a pool and creates the table."""
        with patch(
            "neo_auth_providers.features.providers.repositories.database_settings_repository.asyncpg.create_pool",
            new=AsyncMock(return_value=mock_pool),
        ) as create_pool:
            repository = await create_settings_repository("postgresql://localhost/neo", min_size=2, max_size=4)

        create_pool.assert_awaited_once_with("postgresql://localhost/neo", min_size=2, max_size=4)
        assert "CREATE TABLE IF NOT EXISTS auth_settings" in mock_connection.execute.call_args.args[0]
        assert isinstance(repository, DatabaseAuthSettingsRepository)

    @pytest.mark.asyncio
    async def test_create_settings_repository_unreachable(self):
        """Test connection failures are persistence errors."""
        with patch(
            "neo_auth_providers.features.providers.repositories.database_settings_repository.asyncpg.create_pool",
            new=AsyncMock(side_effect=OSError("connection refused")),
        ):
            with pytest.raises(PersistenceError):
                await create_settings_repository("postgresql://localhost/neo")

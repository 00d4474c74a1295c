"""Keycloak synchronization gateway."""

import logging
from typing import Optional

from keycloak import KeycloakAdmin
from keycloak.exceptions import KeycloakError

from ....config.constants import ProviderKind
from ....core.exceptions import ConfigurationParseError, PersistenceError
from ..entities.protocols import AuthSettingsPersistenceProtocol
from ..entities.provider_config import KeycloakConfig
from ..entities.sync_outcome import SyncOutcome
from ..services.config_normalizer import ConfigNormalizer

logger = logging.getLogger(__name__)


class KeycloakSyncGateway:
    """Confirms the persisted Keycloak configuration against the server.

    Reads the most recently persisted settings, signs in with the configured
    admin account and counts the users that would be synchronized (members of
    ``group`` when one is set, otherwise the whole realm). Remote failures are
    reported as an error outcome rather than raised.
    """

    def __init__(
        self,
        persistence: AuthSettingsPersistenceProtocol,
        normalizer: Optional[ConfigNormalizer] = None,
        verify: bool = True,
        timeout: int = 30,
        admin_realm: str = "master",
    ):
        self.persistence = persistence
        self.normalizer = normalizer or ConfigNormalizer()
        self.verify = verify
        self.timeout = timeout
        self.admin_realm = admin_realm

    async def __call__(self) -> SyncOutcome:
        try:
            config = await self._load_config()
        except (ConfigurationParseError, PersistenceError) as e:
            logger.error(f"Cannot read Keycloak configuration for sync: {e}")
            return SyncOutcome.failure(f"Unable to read Keycloak configuration: {e.message}")

        if config is None:
            return SyncOutcome.failure("Keycloak is not the configured provider")

        try:
            admin = self._create_admin(config)
            if config.group:
                members = await admin.a_get_group_members(config.group)
                count = len(members)
            else:
                count = await admin.a_users_count()
        except KeycloakError as e:
            logger.warning(f"Keycloak sync failed for realm {config.realm}: {e}")
            return SyncOutcome.failure(f"Unable to synchronize with Keycloak: {e}")
        except (OSError, ValueError) as e:
            logger.warning(f"Keycloak unreachable at {config.url}: {e}")
            return SyncOutcome.failure(f"Unable to reach Keycloak: {e}")

        logger.info(f"Keycloak sync found {count} users in realm {config.realm}")
        return SyncOutcome.success(f"Keycloak sync found {count} users")

    async def _load_config(self) -> Optional[KeycloakConfig]:
        settings = await self.persistence.load()
        if settings is None or settings.auth_provider is not ProviderKind.KEYCLOAK:
            return None
        return self.normalizer.normalize(ProviderKind.KEYCLOAK, settings.auth_config)

    def _create_admin(self, config: KeycloakConfig) -> KeycloakAdmin:
        """Admin users sign in to the admin realm and operate on the target realm."""
        return KeycloakAdmin(
            server_url=config.url,
            username=config.admin_user,
            password=config.admin_password,
            realm_name=config.realm,
            user_realm_name=self.admin_realm,
            verify=self.verify,
            timeout=self.timeout,
        )

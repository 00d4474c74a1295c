"""Lifecycle of the delegated-login IdP client."""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Optional

from ....config.constants import LOGIN_PATH
from ....core.exceptions import (
    ConfigurationParseError,
    IdentityProviderError,
    LoginFailedError,
    SessionBootError,
)
from ...providers.entities.protocols import AuthSettingsPersistenceProtocol
from ..entities.protocols import DelegatedIdpClientProtocol
from ..entities.user_profile import UserProfile

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Dict[str, Any]], DelegatedIdpClientProtocol]


class SessionLifecycleService:
    """Owns one lazily created IdP client for the lifetime of the process.

    ``boot()`` builds the client from the persisted auth configuration the
    first time it is needed. Concurrent callers share a single initialization;
    a failed initialization is not remembered, so the next call retries.

    Args:
        settings_store: Store holding the persisted auth settings
        client_factory: Builds a client from the decoded auth configuration
        app_url: Base URL of the application
        login_path: Path the IdP returns to after login
    """

    def __init__(
        self,
        settings_store: AuthSettingsPersistenceProtocol,
        client_factory: ClientFactory,
        app_url: str,
        login_path: str = LOGIN_PATH,
    ):
        self.settings_store = settings_store
        self.client_factory = client_factory
        self.app_url = app_url
        self.login_path = login_path

        self._client: Optional[DelegatedIdpClientProtocol] = None
        self._auth_config: Dict[str, Any] = {}
        self._boot_lock = asyncio.Lock()

    @property
    def redirect_uri(self) -> str:
        return f"{self.app_url.rstrip('/')}{self.login_path}"

    @property
    def client(self) -> Optional[DelegatedIdpClientProtocol]:
        """The initialized client, if ``boot()`` has succeeded."""
        return self._client

    async def boot(self) -> DelegatedIdpClientProtocol:
        """Get the initialized client, creating it on first use.

        Raises:
            SessionBootError: If no configuration is stored or init fails
            ConfigurationParseError: If the stored configuration is malformed
        """
        if self._client is not None:
            return self._client

        async with self._boot_lock:
            if self._client is not None:
                return self._client

            auth_config = await self._load_auth_config()
            client = self.client_factory(auth_config)

            try:
                await client.init()
            except IdentityProviderError:
                raise
            except Exception as e:
                logger.error(f"IdP client initialization failed: {e}")
                raise SessionBootError(f"Cannot initialize identity provider client: {e}") from e

            self._client = client
            self._auth_config = auth_config
            logger.info("IdP client initialized")
            return client

    async def login(self) -> Any:
        """Start a redirect login back to the application.

        Returns:
            Whatever the client produces to continue the flow, typically the
            IdP authorization URL

        Raises:
            LoginFailedError: If the client cannot start the login
        """
        client = await self.boot()
        try:
            return await client.login(redirect_uri=self.redirect_uri)
        except Exception as e:
            logger.warning(f"Login could not be started: {e}")
            raise LoginFailedError("login failed") from e

    async def complete_login(self, code: str, state: Optional[str]) -> Any:
        """Finish the redirect login when the IdP sends the user back.

        Args:
            code: Authorization code from the callback
            state: State value from the callback, checked against the one
                issued by ``login()``

        Raises:
            LoginFailedError: If the state does not match or the code is rejected
        """
        client = await self.boot()
        try:
            result = await client.complete_login(code, state, redirect_uri=self.redirect_uri)
        except LoginFailedError:
            raise
        except Exception as e:
            logger.warning(f"Login could not be completed: {e}")
            raise LoginFailedError("login failed") from e

        logger.info("Login completed with identity provider")
        return result

    async def logout(self) -> None:
        """Log out at the IdP.

        The local token is cleared whether or not the IdP accepted the
        request; IdP errors are re-raised afterwards.
        """
        client = await self.boot()
        try:
            await client.logout(self._auth_config)
        finally:
            client.clear_token()
        logger.info("Logged out from identity provider")

    async def fetch_profile(self) -> Dict[str, Any]:
        """Load the raw profile of the signed-in user from the IdP."""
        client = await self.boot()
        return await client.load_user_profile()

    def map_profile(self, profile: Dict[str, Any]) -> UserProfile:
        """Normalize a raw IdP profile; the token comes from the live client."""
        token = self._client.token if self._client is not None else None
        return UserProfile.from_idp_profile(profile, token=token)

    async def _load_auth_config(self) -> Dict[str, Any]:
        settings = await self.settings_store.load()
        if settings is None or not settings.auth_config:
            raise SessionBootError("No identity provider configuration has been saved")

        try:
            auth_config = json.loads(settings.auth_config)
        except json.JSONDecodeError as e:
            raise ConfigurationParseError(
                f"Stored auth configuration is not valid JSON: {e}",
                details={"provider": settings.auth_provider.value},
            ) from e

        if not isinstance(auth_config, dict):
            raise ConfigurationParseError(
                "Stored auth configuration must be a JSON object",
                details={"provider": settings.auth_provider.value},
            )
        return auth_config

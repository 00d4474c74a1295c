"""Keycloak implementation of the delegated IdP client."""

import logging
import secrets
from typing import Any, Dict, Optional

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from ....core.exceptions import (
    LoginFailedError,
    LogoutFailedError,
    ProfileFetchError,
    SessionBootError,
)

logger = logging.getLogger(__name__)


class KeycloakDelegatedClient:
    """Authorization-code login against a Keycloak realm.

    Built from the persisted Keycloak configuration (``url``, ``realm``,
    ``clientId``). ``login`` returns the URL the browser must be sent to;
    ``complete_login`` checks the returned ``state`` and exchanges the code
    Keycloak sends back for tokens.
    """

    def __init__(
        self,
        server_url: str,
        realm_name: str,
        client_id: str,
        client_secret: Optional[str] = None,
        verify: bool = True,
        timeout: int = 30,
        scope: str = "openid email profile",
    ):
        self.server_url = server_url.rstrip("/")
        self.realm_name = realm_name
        self.client_id = client_id
        self.client_secret = client_secret
        self.verify = verify
        self.timeout = timeout
        self.scope = scope

        self._openid_client: Optional[KeycloakOpenID] = None
        self._token_response: Optional[Dict[str, Any]] = None
        self.state: Optional[str] = None

    @classmethod
    def from_auth_config(cls, auth_config: Dict[str, Any], **kwargs) -> "KeycloakDelegatedClient":
        """Create client from a persisted Keycloak configuration dictionary."""
        missing = [key for key in ("url", "realm", "clientId") if not auth_config.get(key)]
        if missing:
            raise SessionBootError(
                f"Keycloak configuration is missing: {', '.join(missing)}",
                details={"missing": missing},
            )
        return cls(
            server_url=auth_config["url"],
            realm_name=auth_config["realm"],
            client_id=auth_config["clientId"],
            **kwargs,
        )

    @property
    def token(self) -> Optional[str]:
        """Current access token, if signed in."""
        if not self._token_response:
            return None
        return self._token_response.get("access_token")

    @property
    def refresh_token(self) -> Optional[str]:
        if not self._token_response:
            return None
        return self._token_response.get("refresh_token")

    def _ensure_client(self) -> KeycloakOpenID:
        if self._openid_client is None:
            raise SessionBootError("Keycloak client used before init()")
        return self._openid_client

    async def init(self) -> None:
        """Create the OpenID client and check the realm is reachable."""
        try:
            client = KeycloakOpenID(
                server_url=self.server_url,
                realm_name=self.realm_name,
                client_id=self.client_id,
                client_secret_key=self.client_secret,
                verify=self.verify,
                timeout=self.timeout,
            )
            await client.a_well_known()
        except KeycloakError as e:
            logger.error(f"Keycloak realm {self.realm_name} is not reachable: {e}")
            raise SessionBootError(f"Cannot reach Keycloak realm '{self.realm_name}': {e}") from e

        self._openid_client = client
        logger.info(f"Initialized Keycloak client for realm: {self.realm_name}")

    async def login(self, redirect_uri: str) -> str:
        """Build the authorization URL for a redirect login."""
        client = self._ensure_client()
        self.state = secrets.token_urlsafe(16)
        try:
            return await client.a_auth_url(redirect_uri=redirect_uri, scope=self.scope, state=self.state)
        except KeycloakError as e:
            raise LoginFailedError(f"Cannot build Keycloak login URL: {e}") from e

    async def complete_login(self, code: str, state: Optional[str], redirect_uri: str) -> Dict[str, Any]:
        """Finish a redirect login started by ``login``.

        The ``state`` issued by ``login`` is single use; a missing or
        different value is rejected before the code reaches Keycloak.
        """
        expected, self.state = self.state, None
        if not expected or not state or not secrets.compare_digest(expected, state):
            logger.warning(f"Rejected Keycloak login callback for realm {self.realm_name}: state mismatch")
            raise LoginFailedError("Login state does not match the login request")
        return await self.exchange_code(code, redirect_uri)

    async def exchange_code(self, code: str, redirect_uri: str) -> Dict[str, Any]:
        """Trade the authorization code returned by Keycloak for tokens."""
        client = self._ensure_client()
        try:
            self._token_response = await client.a_token(
                grant_type="authorization_code",
                code=code,
                redirect_uri=redirect_uri,
            )
        except KeycloakError as e:
            raise LoginFailedError(f"Keycloak rejected the authorization code: {e}") from e
        return self._token_response

    async def logout(self, auth_config: Dict[str, Any]) -> None:
        """End the Keycloak session unless the configuration disables it."""
        client = self._ensure_client()

        if auth_config.get("disableLogout"):
            logger.debug("Keycloak logout disabled by configuration, keeping IdP session")
            return

        if not self.refresh_token:
            logger.debug("No Keycloak session to end")
            return

        try:
            await client.a_logout(self.refresh_token)
        except KeycloakError as e:
            raise LogoutFailedError(f"Keycloak logout failed: {e}") from e

    async def load_user_profile(self) -> Dict[str, Any]:
        """Fetch the user profile in Keycloak account shape."""
        client = self._ensure_client()
        if not self.token:
            raise ProfileFetchError("No signed-in Keycloak user")

        try:
            userinfo = await client.a_userinfo(self.token)
        except KeycloakError as e:
            raise ProfileFetchError(f"Cannot load Keycloak profile: {e}") from e

        return {
            "id": userinfo.get("sub"),
            "username": userinfo.get("preferred_username"),
            "email": userinfo.get("email"),
            "firstName": userinfo.get("given_name"),
            "lastName": userinfo.get("family_name"),
            "emailVerified": userinfo.get("email_verified"),
        }

    def clear_token(self) -> None:
        self._token_response = None

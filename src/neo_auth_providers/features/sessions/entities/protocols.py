"""Protocol interfaces for the sessions feature."""

from abc import abstractmethod
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class DelegatedIdpClientProtocol(Protocol):
    """Protocol for a client that delegates login to an identity provider."""

    token: Optional[str]

    @abstractmethod
    async def init(self) -> None:
        """Prepare the client; raises if the IdP cannot be reached."""
        ...

    @abstractmethod
    async def login(self, redirect_uri: str) -> Any:
        """Start a redirect-based login returning to ``redirect_uri``."""
        ...

    @abstractmethod
    async def complete_login(self, code: str, state: Optional[str], redirect_uri: str) -> Any:
        """Finish a redirect login with the code and state the IdP returned."""
        ...

    @abstractmethod
    async def logout(self, auth_config: Dict[str, Any]) -> None:
        """End the session at the IdP."""
        ...

    @abstractmethod
    async def load_user_profile(self) -> Dict[str, Any]:
        """Fetch the profile of the signed-in user."""
        ...

    @abstractmethod
    def clear_token(self) -> None:
        """Forget any locally held token."""
        ...

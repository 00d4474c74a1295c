"""Runtime settings for neo-auth-providers."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import LOGIN_PATH


class AuthProviderSettings(BaseSettings):
    """Settings loaded from the environment (``AUTH_`` prefix) or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Delegated login
    app_url: str = Field(default="http://localhost:8000")
    login_path: str = Field(default=LOGIN_PATH)

    # Validation
    oauth2_require_scope: bool = Field(default=False)

    # Persistence
    database_url: Optional[str] = Field(default=None)
    settings_table: str = Field(default="auth_settings")
    db_pool_min_size: int = Field(default=1)
    db_pool_max_size: int = Field(default=5)

    # Keycloak connectivity
    keycloak_verify_ssl: bool = Field(default=True)
    keycloak_timeout: int = Field(default=30)

    @property
    def login_redirect_uri(self) -> str:
        """Absolute URL the IdP redirects back to after login."""
        return f"{self.app_url.rstrip('/')}{self.login_path}"


@lru_cache()
def get_settings() -> AuthProviderSettings:
    """Get cached settings instance."""
    return AuthProviderSettings()

"""Auth settings API routers."""

from .auth_settings_router import (
    get_config_normalizer,
    get_ldap_preview_gateway,
    get_save_orchestrator,
    get_settings_repository,
    router,
)

__all__ = [
    "router",
    "get_config_normalizer",
    "get_ldap_preview_gateway",
    "get_save_orchestrator",
    "get_settings_repository",
]

"""Auth settings API router."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from ....config.constants import ProviderKind
from ....core.exceptions import (
    ConfigurationParseError,
    NeoAuthProvidersError,
    PersistenceError,
    SyncGatewayNotConfiguredError,
    create_error_response,
    get_http_status_code,
)
from ..entities.auth_settings import AuthSettings
from ..entities.protocols import AuthSettingsPersistenceProtocol
from ..entities.provider_config import ProviderConfigBase, config_model_for
from ..models.requests import LdapPreviewRequest, SaveSettingsRequest, SelectProviderRequest
from ..models.responses import ProviderDraftResponse, SaveSettingsResponse, SyncOutcomeResponse
from ..services.config_normalizer import ConfigNormalizer
from ..services.ldap_preview import LdapPreviewGateway
from ..services.save_orchestrator import SaveOrchestrator

logger = logging.getLogger(__name__)

# FastAPI router
router = APIRouter(prefix="/auth-settings", tags=["Auth Settings"])


# Dependency injection helpers
def get_settings_repository() -> AuthSettingsPersistenceProtocol:
    """Get auth settings repository - to be overridden by application."""
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Auth settings repository not configured"
    )


def get_save_orchestrator() -> SaveOrchestrator:
    """Get save orchestrator - to be overridden by application."""
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Save orchestrator not configured"
    )


def get_ldap_preview_gateway() -> LdapPreviewGateway:
    """Get LDAP preview gateway - to be overridden by application."""
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="LDAP preview not configured"
    )


def get_config_normalizer() -> ConfigNormalizer:
    """Get config normalizer."""
    return ConfigNormalizer()


def _http_error(error: NeoAuthProvidersError) -> HTTPException:
    return HTTPException(
        status_code=get_http_status_code(error),
        detail=create_error_response(error),
    )


def _build_draft(provider: ProviderKind, config: Dict[str, Any]) -> ProviderConfigBase:
    try:
        return config_model_for(provider).model_validate(config)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False),
        )


async def _load(repository: AuthSettingsPersistenceProtocol) -> Optional[AuthSettings]:
    try:
        return await repository.load()
    except PersistenceError as e:
        logger.error(f"Cannot load auth settings: {e}")
        raise _http_error(e)


def _draft_for(
    provider: ProviderKind,
    persisted: Optional[AuthSettings],
    normalizer: ConfigNormalizer,
) -> ProviderDraftResponse:
    try:
        draft = normalizer.for_selection(provider, persisted)
    except ConfigurationParseError as e:
        logger.error(f"Stored {provider.value} configuration is damaged: {e}")
        raise _http_error(e)

    return ProviderDraftResponse.from_draft(provider, draft)


# Auth settings endpoints

@router.get("", response_model=ProviderDraftResponse)
async def get_auth_settings(
    repository: AuthSettingsPersistenceProtocol = Depends(get_settings_repository),
    normalizer: ConfigNormalizer = Depends(get_config_normalizer),
) -> ProviderDraftResponse:
    """Current provider and its configuration."""
    persisted = await _load(repository)
    provider = persisted.auth_provider if persisted else ProviderKind.NATIVE
    return _draft_for(provider, persisted, normalizer)


@router.post("/select", response_model=ProviderDraftResponse)
async def select_provider(
    request: SelectProviderRequest,
    repository: AuthSettingsPersistenceProtocol = Depends(get_settings_repository),
    normalizer: ConfigNormalizer = Depends(get_config_normalizer),
) -> ProviderDraftResponse:
    """Draft to show when switching the form to another provider."""
    persisted = await _load(repository)
    return _draft_for(request.provider, persisted, normalizer)


@router.put("", response_model=SaveSettingsResponse)
async def save_auth_settings(
    request: SaveSettingsRequest,
    orchestrator: SaveOrchestrator = Depends(get_save_orchestrator),
) -> SaveSettingsResponse:
    """Save a provider configuration and make it the active provider.

    A save blocked by an invalid field or rolled back after a failed
    synchronization is still a 200 response; the body says what happened.
    """
    draft = _build_draft(request.provider, request.config)

    try:
        result = await orchestrator.save(request.provider, draft)
    except (PersistenceError, SyncGatewayNotConfiguredError) as e:
        logger.error(f"Saving {request.provider.value} settings failed: {e}")
        raise _http_error(e)

    return SaveSettingsResponse.from_result(result)


@router.post("/ldap/preview", response_model=SyncOutcomeResponse)
async def preview_ldap(
    request: LdapPreviewRequest,
    gateway: LdapPreviewGateway = Depends(get_ldap_preview_gateway),
) -> SyncOutcomeResponse:
    """Test LDAP settings without saving them."""
    draft = _build_draft(ProviderKind.LDAP, request.config)
    outcome = await gateway.preview(draft)
    return SyncOutcomeResponse.from_outcome(outcome)

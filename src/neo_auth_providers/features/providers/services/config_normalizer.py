"""Turns persisted provider configuration into editable drafts."""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ....config.constants import Defaults, ProviderKind
from ....core.exceptions import ConfigurationParseError
from ....utils import encoding
from ..entities.auth_settings import AuthSettings
from ..entities.provider_config import ProviderConfigBase, config_model_for

logger = logging.getLogger(__name__)

EDITABLE_FROM_STORE = (ProviderKind.KEYCLOAK, ProviderKind.LDAP)


class ConfigNormalizer:
    """Decodes a persisted configuration blob into a provider draft.

    Absent configuration yields a default draft. A blob that is present but
    cannot be decoded raises ``ConfigurationParseError`` instead of falling
    back to defaults, so a damaged configuration is never silently replaced.
    """

    def normalize(self, kind: ProviderKind, persisted_config: Optional[str]) -> ProviderConfigBase:
        """Build a draft for ``kind`` from an optional persisted blob.

        Args:
            kind: Provider the draft is for
            persisted_config: JSON text as stored, or ``None``/empty when absent

        Returns:
            Draft with load-time defaults merged in

        Raises:
            ConfigurationParseError: If the blob is malformed
        """
        kind = ProviderKind(kind)
        model = config_model_for(kind)

        if kind is ProviderKind.NATIVE or not persisted_config or not persisted_config.strip():
            logger.debug(f"No stored {kind.value} configuration, using defaults")
            return model()

        payload = self._parse(kind, persisted_config)

        if kind is ProviderKind.KEYCLOAK:
            payload = self._decode_public_key(payload)

        payload = self._apply_load_defaults(kind, payload)

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ConfigurationParseError(
                f"Stored {kind.value} configuration has invalid fields",
                details={"provider": kind.value, "errors": e.errors(include_url=False)},
            ) from e

    def for_selection(self, kind: ProviderKind, persisted: Optional[AuthSettings]) -> ProviderConfigBase:
        """Build the draft shown when ``kind`` is selected.

        Only Keycloak and LDAP drafts are filled from the stored blob, and only
        when it was saved for that provider. Native and OAuth2 drafts always
        start from defaults, so a stored OAuth2 secret is never sent back.
        """
        kind = ProviderKind(kind)
        if kind not in EDITABLE_FROM_STORE or persisted is None or persisted.auth_provider is not kind:
            return self.normalize(kind, None)
        return self.normalize(kind, persisted.auth_config)

    def _parse(self, kind: ProviderKind, persisted_config: str) -> Dict[str, Any]:
        try:
            payload = json.loads(persisted_config)
        except json.JSONDecodeError as e:
            raise ConfigurationParseError(
                f"Stored {kind.value} configuration is not valid JSON: {e}",
                details={"provider": kind.value},
            ) from e

        if not isinstance(payload, dict):
            raise ConfigurationParseError(
                f"Stored {kind.value} configuration must be a JSON object",
                details={"provider": kind.value, "type": type(payload).__name__},
            )
        return payload

    def _decode_public_key(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        public_key = payload.get("publicKey")
        if not public_key:
            return payload

        if not isinstance(public_key, str):
            raise ConfigurationParseError(
                "Stored Keycloak public key must be text",
                details={"provider": ProviderKind.KEYCLOAK.value},
            )

        try:
            decoded = encoding.decode(public_key)
        except ValueError as e:
            raise ConfigurationParseError(
                f"Stored Keycloak public key cannot be decoded: {e}",
                details={"provider": ProviderKind.KEYCLOAK.value},
            ) from e

        return {**payload, "publicKey": decoded}

    def _apply_load_defaults(self, kind: ProviderKind, payload: Dict[str, Any]) -> Dict[str, Any]:
        payload = dict(payload)
        if kind in (ProviderKind.KEYCLOAK, ProviderKind.LDAP):
            payload.setdefault("defaultPermissionAddSpace", Defaults.LOAD_DEFAULT_PERMISSION_ADD_SPACE)
            payload.setdefault("disableLogout", Defaults.LOAD_DISABLE_LOGOUT)
        if kind is ProviderKind.LDAP:
            payload.setdefault("allowFormsAuth", Defaults.LOAD_ALLOW_FORMS_AUTH)
        return payload

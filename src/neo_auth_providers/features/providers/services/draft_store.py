"""In-memory working copy of the provider being configured."""

import logging
from typing import Any, Optional

from ....config.constants import ProviderKind
from ..entities.auth_settings import AuthSettings
from ..entities.provider_config import LdapConfig, ProviderConfigBase
from ..entities.sync_outcome import SyncOutcome
from ..entities.validation_result import ValidationResult
from .config_normalizer import ConfigNormalizer
from .field_validator import FieldValidator

logger = logging.getLogger(__name__)


class ConfigDraftStore:
    """Holds the selected provider, its draft and the last LDAP preview.

    Selecting a provider always replaces the draft and resets the preview,
    so nothing from a previously selected provider leaks into the form.
    """

    def __init__(
        self,
        normalizer: Optional[ConfigNormalizer] = None,
        validator: Optional[FieldValidator] = None,
    ):
        self.normalizer = normalizer or ConfigNormalizer()
        self.validator = validator or FieldValidator()
        self.provider: ProviderKind = ProviderKind.NATIVE
        self.draft: ProviderConfigBase = self.normalizer.normalize(ProviderKind.NATIVE, None)
        self.preview: SyncOutcome = SyncOutcome.unavailable()

    def select(self, kind: ProviderKind, persisted: Optional[AuthSettings] = None) -> ProviderConfigBase:
        """Switch to ``kind`` and build a fresh draft for it.

        Raises:
            ConfigurationParseError: If the stored configuration is malformed
        """
        kind = ProviderKind(kind)
        draft = self.normalizer.for_selection(kind, persisted)

        self.provider = kind
        self.draft = draft
        self.preview = SyncOutcome.unavailable()

        logger.debug(f"Selected provider {kind.value}")
        return draft

    def update(self, **fields: Any) -> ProviderConfigBase:
        """Apply user edits to the current draft.

        Raises:
            AttributeError: If a field does not exist on the current provider
        """
        for name in fields:
            if name not in type(self.draft).model_fields:
                raise AttributeError(f"{self.provider.value} configuration has no field '{name}'")
        for name, value in fields.items():
            setattr(self.draft, name, value)
        return self.draft

    def set_ldap_encryption(self, encryption_type: str) -> None:
        """Choose the LDAP transport encryption."""
        if not isinstance(self.draft, LdapConfig):
            raise TypeError("Encryption can only be set on an LDAP draft")
        self.draft.encryption_type = encryption_type

    def record_preview(self, outcome: SyncOutcome) -> None:
        """Remember the result of the last connection preview."""
        self.preview = outcome

    @property
    def validation(self) -> ValidationResult:
        """Validation of the current draft, recomputed on every access."""
        return self.validator.validate(self.provider, self.draft)

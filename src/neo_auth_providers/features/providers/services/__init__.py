"""Provider configuration services."""

from .config_normalizer import ConfigNormalizer
from .draft_store import ConfigDraftStore
from .field_validator import FieldValidator, is_empty, ldap_group_member_missing
from .ldap_preview import LdapPreviewGateway
from .save_orchestrator import SaveOrchestrator

__all__ = [
    "ConfigNormalizer",
    "ConfigDraftStore",
    "FieldValidator",
    "is_empty",
    "ldap_group_member_missing",
    "LdapPreviewGateway",
    "SaveOrchestrator",
]

"""Save, synchronize and roll back provider configuration.

A save runs through these stages::

    EDITING -> VALIDATING -> PERSISTING -> SYNCING -> SETTLED | ROLLED_BACK

Synchronization only starts once the new configuration is persisted, since
the backend confirms a provider using the stored settings. When the provider
cannot be confirmed, the active provider is switched back to Native and that
switch is persisted too, so the application never points at an unreachable
provider.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional, Tuple

from ....config.constants import Defaults, ProviderKind, SAVED_MESSAGE
from ....core.exceptions import PersistenceError, SyncGatewayNotConfiguredError
from ....utils import encoding
from ..entities.auth_settings import AuthSettings
from ..entities.protocols import (
    AuthSettingsPersistenceProtocol,
    ChangeListenerProtocol,
    NotifierProtocol,
    ProviderSyncGatewayProtocol,
)
from ..entities.provider_config import (
    KeycloakConfig,
    LdapConfig,
    NativeConfig,
    ProviderConfigBase,
    parse_port,
)
from ..entities.save_result import SaveResult, SaveState
from ..entities.sync_outcome import SyncOutcome
from .field_validator import FieldValidator, ldap_group_member_missing

logger = logging.getLogger(__name__)


class SaveOrchestrator:
    """Runs the validate -> persist -> sync -> rollback sequence.

    Saves are serialized: a save started while another is in flight waits
    until the first one has settled.

    Args:
        persistence: Store owning the authoritative settings
        sync_gateways: Synchronization call per provider that needs one
        current_provider: Returns the provider the rest of the application
            currently uses
        on_change: Called when a confirmed provider differs from
            ``current_provider()``
        on_persisted: Called with the settings left in the store once a
            save has settled or been rolled back
        notifier: Receives the final "Saved" confirmation
        validator: Field validator, defaults to the standard rules
    """

    def __init__(
        self,
        persistence: AuthSettingsPersistenceProtocol,
        sync_gateways: Dict[ProviderKind, ProviderSyncGatewayProtocol],
        current_provider: Callable[[], ProviderKind],
        on_change: Optional[ChangeListenerProtocol] = None,
        notifier: Optional[NotifierProtocol] = None,
        validator: Optional[FieldValidator] = None,
        on_persisted: Optional[Callable[[AuthSettings], None]] = None,
    ):
        self.persistence = persistence
        self.sync_gateways = {ProviderKind(kind): gateway for kind, gateway in sync_gateways.items()}
        self.current_provider = current_provider
        self.on_change = on_change
        self.notifier = notifier
        self.validator = validator or FieldValidator()
        self.on_persisted = on_persisted

        self.state: SaveState = SaveState.EDITING
        self.failures: Dict[ProviderKind, str] = {}
        self.active_provider: Optional[ProviderKind] = None
        self._lock = asyncio.Lock()

    async def save(self, kind: ProviderKind, draft: ProviderConfigBase) -> SaveResult:
        """Validate, persist and synchronize ``draft`` as the active provider.

        Returns:
            SaveResult describing where the sequence ended

        Raises:
            PersistenceError: If the settings store rejects a write
            SyncGatewayNotConfiguredError: If ``kind`` needs a sync gateway
                and none was registered
        """
        kind = ProviderKind(kind)

        async with self._lock:
            self.failures.clear()

            if kind.requires_sync and kind not in self.sync_gateways:
                raise SyncGatewayNotConfiguredError(
                    f"No synchronization gateway registered for {kind.value}",
                    details={"provider": kind.value},
                )

            self.state = SaveState.VALIDATING
            # Checked after trimming so a blank required field is never persisted
            validation = self.validator.validate(kind, draft.trimmed())
            if not validation.is_valid:
                return self._abort(kind, validation.first_invalid)

            prepared, invalid_field = self.prepare(kind, draft)
            if prepared is None:
                return self._abort(kind, invalid_field)

            settings = AuthSettings(auth_provider=kind, auth_config=prepared.to_json())
            await self._persist(settings)

            if kind.requires_sync:
                result = await self._synchronize(kind, settings)
            else:
                self._settle(SaveState.SETTLED, settings)
                result = SaveResult(provider=kind, state=SaveState.SETTLED, settings=settings)

            if self.notifier is not None:
                self.notifier.notify_success(SAVED_MESSAGE)

            return result

    def prepare(
        self, kind: ProviderKind, draft: ProviderConfigBase
    ) -> Tuple[Optional[ProviderConfigBase], Optional[str]]:
        """Produce the configuration that will be persisted.

        Works on a copy; the draft being edited is left untouched.

        Returns:
            ``(config, None)`` when ready, or ``(None, field)`` naming the
            field that blocks the save
        """
        kind = ProviderKind(kind)

        if kind is ProviderKind.NATIVE:
            return NativeConfig(), None

        config = draft.trimmed()

        if isinstance(config, KeycloakConfig):
            url = config.url[:-1] if config.url.endswith("/") else config.url
            config = config.model_copy(update={
                "url": url,
                "public_key": encoding.encode(config.public_key),
                "default_permission_add_space": _default(
                    config.default_permission_add_space, Defaults.SAVE_DEFAULT_PERMISSION_ADD_SPACE
                ),
                "disable_logout": _default(config.disable_logout, Defaults.SAVE_DISABLE_LOGOUT),
            })

        elif isinstance(config, LdapConfig):
            port = parse_port(config.server_port)
            if port is None:
                return None, "server_port"
            config = config.model_copy(update={"server_port": port})
            if ldap_group_member_missing(config):
                return None, "attribute_group_member"

        return config, None

    def _abort(self, kind: ProviderKind, invalid_field: Optional[str]) -> SaveResult:
        self.state = SaveState.EDITING
        logger.info(f"Save of {kind.value} configuration stopped: '{invalid_field}' is invalid")
        return SaveResult(provider=kind, state=SaveState.EDITING, invalid_field=invalid_field)

    async def _persist(self, settings: AuthSettings) -> None:
        self.state = SaveState.PERSISTING
        try:
            await self.persistence.save(settings)
        except PersistenceError:
            self.state = SaveState.EDITING
            raise
        except Exception as e:
            self.state = SaveState.EDITING
            logger.error(f"Failed to persist {settings.auth_provider.value} settings: {e}")
            raise PersistenceError(
                f"Cannot persist auth settings: {e}",
                details={"provider": settings.auth_provider.value},
            ) from e

        logger.info(f"Persisted auth settings for provider {settings.auth_provider.value}")

    def _settle(self, state: SaveState, settings: AuthSettings) -> None:
        self.state = state
        self.active_provider = settings.auth_provider
        if self.on_persisted is not None:
            self.on_persisted(settings)

    async def _synchronize(self, kind: ProviderKind, settings: AuthSettings) -> SaveResult:
        self.state = SaveState.SYNCING
        gateway = self.sync_gateways[kind]

        try:
            outcome = await gateway()
        except Exception as e:
            # An exception from the gateway leaves the provider unconfirmed
            logger.exception(f"{kind.value} synchronization raised")
            outcome = SyncOutcome.failure(str(e) or e.__class__.__name__)

        if outcome.is_error:
            return await self._rollback(kind, outcome.message)

        if kind == self.current_provider():
            logger.info(f"{kind.value} synchronization confirmed: {outcome.message}")
        elif self.on_change is not None:
            self.on_change(settings)

        self._settle(SaveState.SETTLED, settings)

        return SaveResult(provider=kind, state=SaveState.SETTLED, settings=settings)

    async def _rollback(self, kind: ProviderKind, message: str) -> SaveResult:
        logger.warning(f"{kind.value} synchronization failed, reverting to native: {message}")
        self.failures[kind] = message

        native = AuthSettings.native()
        await self._persist(native)

        self._settle(SaveState.ROLLED_BACK, native)
        return SaveResult(
            provider=kind,
            state=SaveState.ROLLED_BACK,
            failure_message=message,
            settings=native,
        )


def _default(value: Optional[bool], default: bool) -> bool:
    return default if value is None else value

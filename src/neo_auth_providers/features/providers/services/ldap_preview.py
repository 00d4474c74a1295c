"""Try LDAP settings without saving them."""

import logging
from typing import Optional

from ....config.constants import LDAP_PREVIEW_MODAL, SAVED_MESSAGE
from ..entities.protocols import LdapPreviewClientProtocol, ModalProtocol, NotifierProtocol
from ..entities.provider_config import LdapConfig
from ..entities.sync_outcome import SyncOutcome

logger = logging.getLogger(__name__)


class LdapPreviewGateway:
    """Runs an LDAP connection test for user feedback only.

    The preview never persists anything and never changes the active
    provider; it is independent of the save sequence.
    """

    def __init__(
        self,
        preview_client: LdapPreviewClientProtocol,
        modal: Optional[ModalProtocol] = None,
        notifier: Optional[NotifierProtocol] = None,
    ):
        self.preview_client = preview_client
        self.modal = modal
        self.notifier = notifier

    async def preview(self, draft: LdapConfig) -> SyncOutcome:
        """Test ``draft`` against the directory.

        The port is integer-parsed on a copy before the call; the draft itself
        is not modified.
        """
        config = draft.with_parsed_port()
        logger.debug(f"Previewing LDAP connection to {config.server_host}:{config.server_port}")

        outcome = await self.preview_client.preview_ldap(config)

        if outcome.is_error:
            logger.info(f"LDAP preview failed: {outcome.message}")

        if self.modal is not None:
            self.modal.open(LDAP_PREVIEW_MODAL, outcome)
        if self.notifier is not None:
            self.notifier.notify_success(SAVED_MESSAGE)

        return outcome

# hexattach/services/associations/cascade.py
from __future__ import annotations

from hexattach.common.logging import get_logger
from hexattach.domain.entities.host import HostRef
from hexattach.domain.enums.delete_mode import DeleteMode
from hexattach.domain.policies.cascade import decide_cascade
from hexattach.domain.ports.association_store import AssociationStorePort

logger = get_logger(__name__)


class CascadeController:
    """
    Deletes a host's media after the host itself was deleted.

    Synchronous and fail-fast: the first StoreError aborts the remaining
    deletes and propagates; already deleted media stay deleted.
    """

    def __init__(self, store: AssociationStorePort, *, detach_on_soft_delete: bool) -> None:
        self.store = store
        self.detach_on_soft_delete = detach_on_soft_delete

    def run(self, host: HostRef, mode: DeleteMode) -> int:
        decision = decide_cascade(mode, detach_on_soft_delete=self.detach_on_soft_delete)
        if not decision.cascade:
            logger.info("host %s deleted (%s): media kept", host, decision.reason)
            return 0

        media = self.store.find_all(host)
        for medium in media:
            self.store.delete(medium)
        logger.info("host %s deleted (%s): %d media deleted", host, decision.reason, len(media))
        return len(media)

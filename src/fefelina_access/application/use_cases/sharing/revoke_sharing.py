"""Revoke sharing use case."""

import logging
from collections.abc import Callable
from datetime import date
from uuid import UUID

from fefelina_access.application.dto import RevocationImpact
from fefelina_access.application.ports import UnitOfWorkFactory
from fefelina_access.application.sharing import SharingGrantStore
from fefelina_access.domain.exceptions import AccessError

logger = logging.getLogger(__name__)


class RevocationRequiresConfirmation(AccessError):
    """Revoking would orphan live work assignments; caller must confirm."""

    def __init__(self, impact: RevocationImpact) -> None:
        super().__init__(
            f"Grantee {impact.grantee_id} has {len(impact.live_assignments)} open "
            f"assignment(s) for client {impact.client_id}"
        )
        self.impact = impact


class RevokeSharingUseCase:
    """Unshare a client, warning first about the grantee's live assignments."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        grant_store: SharingGrantStore,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._grant_store = grant_store
        self._today = today

    async def assess(self, client_id: UUID, grantee_id: str) -> RevocationImpact:
        """Open or future-dated assignments of grantee on client."""
        today = self._today()
        async with self._uow_factory() as uow:
            assignments = await uow.assignments.list_live_for_assignee(
                client_id, grantee_id, today
            )
        impact = RevocationImpact(
            client_id=client_id,
            grantee_id=grantee_id,
            live_assignments=[a for a in assignments if a.is_live(today)],
        )
        if impact.requires_confirmation:
            logger.warning(
                "Revocation would orphan %d assignment(s)",
                len(impact.live_assignments),
                extra={"client_id": str(client_id), "grantee_id": grantee_id},
            )
        return impact

    async def execute(
        self, client_id: UUID, grantee_id: str, *, confirmed: bool = False
    ) -> RevocationImpact:
        """Revoke grant. Unconfirmed revocations with live assignments are refused."""
        impact = await self.assess(client_id, grantee_id)
        if impact.requires_confirmation and not confirmed:
            raise RevocationRequiresConfirmation(impact)
        await self._grant_store.revoke(client_id, grantee_id)
        return impact

"""Sharing grant store - create, list and revoke client sharing grants."""

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from fefelina_access.application.ports import UnitOfWorkFactory
from fefelina_access.domain.entities import ActiveUser, SharedWith, SharingGrant
from fefelina_access.domain.exceptions import GrantConflict, GrantTargetInvalid, NotFound
from fefelina_access.domain.value_objects import AccessLevel

logger = logging.getLogger(__name__)


class SharingGrantStore:
    """Grants are plain rows: one per (client, grantee), deleted on revoke.

    The store knows nothing about work assignments; checking what a
    revocation would orphan is up to the caller.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def create(
        self,
        client_id: UUID,
        grantee_id: str,
        access_level: AccessLevel = AccessLevel.READ,
        *,
        shared_by: str,
        field_restrictions: dict[str, Any] | None = None,
    ) -> UUID:
        """Share client with grantee. Returns the new grant id."""
        if grantee_id == shared_by:
            raise GrantTargetInvalid("Cannot share a client with yourself")

        async with self._uow_factory() as uow:
            grantee = await uow.profiles.get_by_user_id(grantee_id)
            if grantee is None or not grantee.is_usable:
                raise GrantTargetInvalid(f"User {grantee_id} has no active profile")

            existing = await uow.sharing.get_for_client(client_id, grantee_id)
            if existing:
                raise GrantConflict(existing)

            grant = SharingGrant(
                sharing_id=uuid4(),
                client_id=client_id,
                shared_by_user_id=shared_by,
                shared_with_user_id=grantee_id,
                access_level=access_level,
                shared_at=datetime.now(UTC),
                field_restrictions=field_restrictions,
            )
            grant = await uow.sharing.create(grant)

        logger.info(
            "Client shared",
            extra={
                "client_id": str(client_id),
                "grantee_id": grantee_id,
                "shared_by": shared_by,
                "access_level": access_level.value,
            },
        )
        return grant.sharing_id

    async def list_grantees(self, client_id: UUID) -> list[SharedWith]:
        """Current grants on client, read straight from the store."""
        async with self._uow_factory() as uow:
            return await uow.sharing.list_by_client(client_id)

    async def revoke(self, client_id: UUID, grantee_id: str) -> None:
        """Delete the grant. Always deletes when it exists."""
        async with self._uow_factory() as uow:
            deleted = await uow.sharing.delete(client_id, grantee_id)
        if not deleted:
            raise NotFound("SharingGrant", f"{client_id}/{grantee_id}")
        logger.info(
            "Client sharing revoked",
            extra={"client_id": str(client_id), "grantee_id": grantee_id},
        )

    async def list_active_users(self) -> list[ActiveUser]:
        """Users that can be picked as grant targets."""
        async with self._uow_factory() as uow:
            return await uow.profiles.list_active()

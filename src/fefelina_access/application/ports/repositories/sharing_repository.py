"""Sharing grant repository port."""

from typing import Protocol
from uuid import UUID

from fefelina_access.domain.entities import SharedWith, SharingGrant


class SharingRepository(Protocol):
    """Port for client sharing grants.

    ``create`` must be atomic with respect to the (client, grantee)
    uniqueness rule and raise ``GrantConflict`` when it is violated.
    """

    async def get_for_client(
        self, client_id: UUID, shared_with_user_id: str
    ) -> SharingGrant | None: ...

    async def create(self, grant: SharingGrant) -> SharingGrant: ...

    async def delete(self, client_id: UUID, shared_with_user_id: str) -> bool: ...

    async def list_by_client(self, client_id: UUID) -> list[SharedWith]: ...

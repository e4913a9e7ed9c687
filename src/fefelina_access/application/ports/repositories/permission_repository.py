"""Permission repository port."""

from typing import Protocol
from uuid import UUID

from fefelina_access.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for resource-level permission rows."""

    async def list_by_profile(self, profile_id: UUID) -> list[Permission]: ...

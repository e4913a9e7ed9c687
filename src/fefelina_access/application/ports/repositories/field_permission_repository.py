"""Field permission repository port."""

from typing import Protocol
from uuid import UUID

from fefelina_access.domain.entities import FieldPermission
from fefelina_access.domain.value_objects import TableTag


class FieldPermissionRepository(Protocol):
    """Port for field-level security rows."""

    async def list_by_table(
        self, profile_id: UUID, table_name: TableTag
    ) -> list[FieldPermission]: ...

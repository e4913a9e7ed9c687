"""PostgreSQL field permission repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from fefelina_access.domain.entities import FieldPermission
from fefelina_access.domain.value_objects import TableTag


class PostgresFieldPermissionRepository:
    """Field permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_table(
        self, profile_id: UUID, table_name: TableTag
    ) -> list[FieldPermission]:
        """List field rules of profile on table."""
        cur = await self._conn.execute(
            "SELECT field_name, can_read, can_write FROM field_permissions "
            "WHERE profile_id = %s AND table_name = %s",
            (profile_id, table_name.value),
        )
        rows = await cur.fetchall()
        return [
            FieldPermission(
                profile_id=profile_id,
                table_name=table_name,
                field_name=r[0],
                can_read=r[1],
                can_write=r[2],
            )
            for r in rows
        ]

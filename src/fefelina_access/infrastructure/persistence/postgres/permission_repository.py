"""PostgreSQL permission repository implementation."""

import logging
from uuid import UUID

from psycopg import AsyncConnection

from fefelina_access.domain.entities import Permission
from fefelina_access.domain.exceptions import ValidationError
from fefelina_access.domain.value_objects import ResourceTag

logger = logging.getLogger(__name__)


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_profile(self, profile_id: UUID) -> list[Permission]:
        """List CRUD grants of profile. Rows for unknown resources are skipped."""
        cur = await self._conn.execute(
            "SELECT resource, can_read, can_create, can_update, can_delete "
            "FROM permissions WHERE profile_id = %s",
            (profile_id,),
        )
        rows = await cur.fetchall()
        permissions = []
        for r in rows:
            try:
                resource = ResourceTag.parse(r[0])
            except ValidationError:
                logger.warning(
                    "Skipping permission row for unknown resource %r",
                    r[0],
                    extra={"profile_id": str(profile_id)},
                )
                continue
            permissions.append(
                Permission(
                    profile_id=profile_id,
                    resource=resource,
                    can_read=r[1],
                    can_create=r[2],
                    can_update=r[3],
                    can_delete=r[4],
                )
            )
        return permissions

"""PostgreSQL sharing grant repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from fefelina_access.domain.entities import SharedWith, SharingGrant
from fefelina_access.domain.exceptions import GrantConflict
from fefelina_access.domain.value_objects import AccessLevel

_GRANT_COLUMNS = (
    "id, client_id, shared_by_user_id, shared_with_user_id, access_level, "
    "field_restrictions, shared_at"
)


def _grant_from_row(r: tuple) -> SharingGrant:
    return SharingGrant(
        sharing_id=r[0],
        client_id=r[1],
        shared_by_user_id=str(r[2]),
        shared_with_user_id=str(r[3]),
        access_level=AccessLevel(r[4]),
        field_restrictions=r[5],
        shared_at=r[6],
    )


class PostgresSharingRepository:
    """Sharing grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_for_client(
        self, client_id: UUID, shared_with_user_id: str
    ) -> SharingGrant | None:
        """Get grant of client for grantee."""
        cur = await self._conn.execute(
            f"SELECT {_GRANT_COLUMNS} FROM client_sharing "
            "WHERE client_id = %s AND shared_with_user_id = %s",
            (client_id, shared_with_user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _grant_from_row(r)

    async def create(self, grant: SharingGrant) -> SharingGrant:
        """Insert grant; a concurrent duplicate raises GrantConflict."""
        cur = await self._conn.execute(
            "INSERT INTO client_sharing "
            f"({_GRANT_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (client_id, shared_with_user_id) DO NOTHING RETURNING id",
            (
                grant.sharing_id,
                grant.client_id,
                grant.shared_by_user_id,
                grant.shared_with_user_id,
                grant.access_level.value,
                Jsonb(grant.field_restrictions) if grant.field_restrictions is not None else None,
                grant.shared_at,
            ),
        )
        if await cur.fetchone() is None:
            existing = await self.get_for_client(grant.client_id, grant.shared_with_user_id)
            raise GrantConflict(existing or grant)
        return grant

    async def delete(self, client_id: UUID, shared_with_user_id: str) -> bool:
        """Delete grant; returns whether a row was removed."""
        cur = await self._conn.execute(
            "DELETE FROM client_sharing WHERE client_id = %s AND shared_with_user_id = %s",
            (client_id, shared_with_user_id),
        )
        return cur.rowcount > 0

    async def list_by_client(self, client_id: UUID) -> list[SharedWith]:
        """List grants of client with client and user names."""
        cur = await self._conn.execute(
            "SELECT s.id, s.client_id, c.nome, s.shared_with_user_id, grantee.full_name, "
            "s.shared_by_user_id, grantor.full_name, s.access_level, "
            "s.field_restrictions, s.shared_at "
            "FROM client_sharing s "
            "LEFT JOIN clients c ON c.id = s.client_id "
            "LEFT JOIN user_profiles grantee ON grantee.user_id = s.shared_with_user_id "
            "LEFT JOIN user_profiles grantor ON grantor.user_id = s.shared_by_user_id "
            "WHERE s.client_id = %s ORDER BY s.shared_at",
            (client_id,),
        )
        rows = await cur.fetchall()
        return [
            SharedWith(
                sharing_id=r[0],
                client_id=r[1],
                client_name=r[2],
                shared_with_user_id=str(r[3]),
                shared_with_user_name=r[4],
                shared_by_user_id=str(r[5]),
                shared_by_user_name=r[6],
                access_level=AccessLevel(r[7]),
                field_restrictions=r[8],
                shared_at=r[9],
            )
            for r in rows
        ]

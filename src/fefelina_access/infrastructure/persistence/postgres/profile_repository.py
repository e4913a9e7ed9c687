"""PostgreSQL profile repository implementation."""

from psycopg import AsyncConnection

from fefelina_access.domain.entities import ActiveUser, Profile, UserProfile

_USER_PROFILE_SELECT = (
    "SELECT up.id, up.user_id, up.full_name, up.email, up.avatar_url, up.phone, "
    "up.is_active, p.id, p.name, p.description, p.is_admin, p.is_active "
    "FROM user_profiles up JOIN profiles p ON p.id = up.profile_id "
)


class PostgresProfileRepository:
    """Profile repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_user_id(self, user_id: str) -> UserProfile | None:
        """Get profile assignment with its profile by identity."""
        cur = await self._conn.execute(
            _USER_PROFILE_SELECT + "WHERE up.user_id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return UserProfile(
            id=r[0],
            user_id=str(r[1]),
            full_name=r[2],
            email=r[3],
            avatar_ref=r[4],
            phone=r[5],
            is_active=r[6],
            profile=Profile(
                id=r[7],
                name=r[8],
                description=r[9],
                is_admin=r[10],
                is_active=r[11],
            ),
        )

    async def list_active(self) -> list[ActiveUser]:
        """List active users ordered by name."""
        cur = await self._conn.execute(
            "SELECT up.user_id, up.full_name, up.email, p.name, p.is_admin "
            "FROM user_profiles up JOIN profiles p ON p.id = up.profile_id "
            "WHERE up.is_active AND p.is_active ORDER BY up.full_name"
        )
        rows = await cur.fetchall()
        return [
            ActiveUser(
                user_id=str(r[0]),
                full_name=r[1],
                email=r[2],
                profile_name=r[3],
                is_admin=r[4],
            )
            for r in rows
        ]

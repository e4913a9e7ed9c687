"""PostgreSQL work assignment repository implementation.

Reads the ``visits`` table owned by the scheduling module, which is not part of
this schema. Expected columns: ``id``, ``client_id``, ``assigned_user_id`` (identity
of the sitter the visit is assigned to), ``data`` and ``status``.
"""

from datetime import date
from uuid import UUID

from psycopg import AsyncConnection

from fefelina_access.domain.entities import AssignmentStatus, WorkAssignment


class PostgresAssignmentRepository:
    """Reads visits assigned to a user; the visits table is owned elsewhere."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_live_for_assignee(
        self, client_id: UUID, user_id: str, today: date
    ) -> list[WorkAssignment]:
        """Scheduled or future-dated, non-cancelled visits of user for client."""
        cur = await self._conn.execute(
            "SELECT id, client_id, assigned_user_id, data, status FROM visits "
            "WHERE client_id = %s AND assigned_user_id = %s "
            "AND status <> %s AND (status = %s OR data >= %s) "
            "ORDER BY data",
            (
                client_id,
                user_id,
                AssignmentStatus.CANCELLED.value,
                AssignmentStatus.SCHEDULED.value,
                today,
            ),
        )
        rows = await cur.fetchall()
        return [
            WorkAssignment(
                id=r[0],
                client_id=r[1],
                assigned_user_id=str(r[2]),
                scheduled_for=r[3],
                status=AssignmentStatus(r[4]),
            )
            for r in rows
        ]

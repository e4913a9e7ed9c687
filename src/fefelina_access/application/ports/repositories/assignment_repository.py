"""Work assignment repository port."""

from datetime import date
from typing import Protocol
from uuid import UUID

from fefelina_access.domain.entities import WorkAssignment


class AssignmentRepository(Protocol):
    """Port for assignments owned by the scheduling domain (read-only here)."""

    async def list_live_for_assignee(
        self, client_id: UUID, user_id: str, today: date
    ) -> list[WorkAssignment]: ...

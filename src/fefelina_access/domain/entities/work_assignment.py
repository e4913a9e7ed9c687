"""Work assignment (scheduled visit) as seen by the revocation check."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class AssignmentStatus(StrEnum):
    SCHEDULED = "agendada"
    DONE = "realizada"
    CANCELLED = "cancelada"


@dataclass
class WorkAssignment:
    """Visit tied to a client and assigned to a user."""

    id: UUID
    client_id: UUID
    assigned_user_id: str
    scheduled_for: date
    status: AssignmentStatus

    def is_live(self, today: date) -> bool:
        """Open or future-dated, and not cancelled."""
        if self.status is AssignmentStatus.CANCELLED:
            return False
        return self.status is AssignmentStatus.SCHEDULED or self.scheduled_for >= today

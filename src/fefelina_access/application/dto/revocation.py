"""Revocation impact DTO."""

from dataclasses import dataclass, field
from uuid import UUID

from fefelina_access.domain.entities import WorkAssignment


@dataclass
class RevocationImpact:
    """Live assignments a grantee still holds on the client being unshared."""

    client_id: UUID
    grantee_id: str
    live_assignments: list[WorkAssignment] = field(default_factory=list)

    @property
    def requires_confirmation(self) -> bool:
        return bool(self.live_assignments)

"""Resource-level CRUD permission row."""

from dataclasses import dataclass
from uuid import UUID

from fefelina_access.domain.value_objects import CrudAction, ResourceTag


@dataclass
class Permission:
    """CRUD grants of one profile on one resource."""

    profile_id: UUID
    resource: ResourceTag
    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    def allows(self, action: CrudAction) -> bool:
        """Flag stored for action."""
        return {
            CrudAction.READ: self.can_read,
            CrudAction.CREATE: self.can_create,
            CrudAction.UPDATE: self.can_update,
            CrudAction.DELETE: self.can_delete,
        }[action]

"""Domain entities."""

from fefelina_access.domain.entities.field_permission import FieldPermission
from fefelina_access.domain.entities.permission import Permission
from fefelina_access.domain.entities.profile import ActiveUser, Profile, UserProfile
from fefelina_access.domain.entities.sharing_grant import SharedWith, SharingGrant
from fefelina_access.domain.entities.work_assignment import (
    AssignmentStatus,
    WorkAssignment,
)

__all__ = [
    "ActiveUser",
    "AssignmentStatus",
    "FieldPermission",
    "Permission",
    "Profile",
    "SharedWith",
    "SharingGrant",
    "UserProfile",
    "WorkAssignment",
]

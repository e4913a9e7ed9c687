"""Repository ports."""

from fefelina_access.application.ports.repositories.assignment_repository import (
    AssignmentRepository,
)
from fefelina_access.application.ports.repositories.field_permission_repository import (
    FieldPermissionRepository,
)
from fefelina_access.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from fefelina_access.application.ports.repositories.profile_repository import (
    ProfileRepository,
)
from fefelina_access.application.ports.repositories.sharing_repository import (
    SharingRepository,
)

__all__ = [
    "AssignmentRepository",
    "FieldPermissionRepository",
    "PermissionRepository",
    "ProfileRepository",
    "SharingRepository",
]

"""Authorization engine components."""

from fefelina_access.application.authorization.field_permission_matrix import (
    FieldPermissionMatrix,
)
from fefelina_access.application.authorization.gateway import (
    DEFAULT_MASK_TOKEN,
    AuthorizationGateway,
)
from fefelina_access.application.authorization.permission_matrix import PermissionMatrix
from fefelina_access.application.authorization.profile_resolver import ProfileResolver
from fefelina_access.application.authorization.session_monitor import SessionMonitor

__all__ = [
    "DEFAULT_MASK_TOKEN",
    "AuthorizationGateway",
    "FieldPermissionMatrix",
    "PermissionMatrix",
    "ProfileResolver",
    "SessionMonitor",
]

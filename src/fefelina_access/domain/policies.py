"""Pure defaulting policies for resource and field permissions."""

from fefelina_access.domain.entities import FieldPermission, Permission
from fefelina_access.domain.value_objects import (
    DEFAULT_FIELD_POLICY,
    CrudAction,
    FieldPolicy,
)


def resolve_resource_access(row: Permission | None, action: CrudAction) -> bool:
    """Missing permission row means no access."""
    if row is None:
        return False
    return row.allows(action)


def resolve_field_policy(row: FieldPermission | None) -> FieldPolicy:
    """Missing field row means read allowed, write denied.

    A stored row can never make a field writable without also making it
    readable.
    """
    if row is None:
        return DEFAULT_FIELD_POLICY
    return FieldPolicy(
        can_read=row.can_read,
        can_write=row.can_read and row.can_write,
    )

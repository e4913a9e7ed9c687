"""Field-level security row."""

from dataclasses import dataclass
from uuid import UUID

from fefelina_access.domain.value_objects import TableTag


@dataclass
class FieldPermission:
    """Read/write override of one profile on one table field."""

    profile_id: UUID
    table_name: TableTag
    field_name: str
    can_read: bool
    can_write: bool

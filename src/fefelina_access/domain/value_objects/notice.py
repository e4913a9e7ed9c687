"""Non-fatal notices and change events published by the gateway."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from fefelina_access.domain.value_objects.table_tag import TableTag


class LoadBoundary(StrEnum):
    """Asynchronous load boundaries of one authorization cycle."""

    PROFILE = "profile"
    PERMISSIONS = "permissions"
    FIELD_PERMISSIONS = "field_permissions"


@dataclass(frozen=True)
class AccessNotice:
    """A background load failed and a safe default was applied."""

    boundary: LoadBoundary
    message: str
    epoch: int
    table: TableTag | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class AccessChange:
    """Published to gateway subscribers whenever decisions may have changed."""

    epoch: int
    loading: bool
    authenticated: bool

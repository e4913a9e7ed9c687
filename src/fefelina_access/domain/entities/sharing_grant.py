"""Client sharing grants."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from fefelina_access.domain.value_objects import AccessLevel


@dataclass
class SharingGrant:
    """Delegation of access to one client record from one user to another."""

    sharing_id: UUID
    client_id: UUID
    shared_by_user_id: str
    shared_with_user_id: str
    access_level: AccessLevel
    shared_at: datetime
    field_restrictions: dict[str, Any] | None = None


@dataclass
class SharedWith:
    """Grant denormalized with client and user names for listing."""

    sharing_id: UUID
    client_id: UUID
    client_name: str | None
    shared_with_user_id: str
    shared_with_user_name: str | None
    shared_by_user_id: str
    shared_by_user_name: str | None
    access_level: AccessLevel
    shared_at: datetime
    field_restrictions: dict[str, Any] | None = None

"""Domain exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fefelina_access.domain.entities import SharingGrant


class AccessError(Exception):
    """Base exception for the access engine."""

    pass


class NotFound(AccessError):
    """Requested record was not found."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ValidationError(AccessError):
    """Validation failed for input data."""

    pass


class IdentityUnresolved(AccessError):
    """No session, or the identity has no profile assignment."""

    pass


class ProfileInactive(AccessError):
    """Profile or its user assignment is deactivated."""

    pass


class BackingStoreUnavailable(AccessError):
    """Transient failure talking to the backing store."""

    pass


class GrantConflict(AccessError):
    """An active sharing grant already exists for the (client, grantee) pair."""

    def __init__(self, existing: SharingGrant) -> None:
        super().__init__(
            f"Client {existing.client_id} is already shared with "
            f"{existing.shared_with_user_id} (grant {existing.sharing_id})"
        )
        self.existing = existing


class GrantTargetInvalid(AccessError):
    """Grantee does not resolve to an active profile."""

    pass

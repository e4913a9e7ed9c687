"""Route/action guard decisions."""

from dataclasses import dataclass
from enum import StrEnum

from fefelina_access.domain.value_objects.crud_action import CrudAction
from fefelina_access.domain.value_objects.resource_tag import ResourceTag


class DecisionStatus(StrEnum):
    ALLOWED = "allowed"
    DENIED = "denied"
    PENDING = "pending"


class DenialReason(StrEnum):
    """Why a guard denied access."""

    UNAUTHENTICATED = "unauthenticated"
    ADMIN_REQUIRED = "admin_required"
    MISSING_PERMISSION = "missing_permission"


@dataclass(frozen=True)
class Decision:
    """Allowed, Denied(reason) or Pending while the profile is loading.

    Denials carry the requested resource/action and the resolved profile
    name so guards can tell the user what they are missing.
    """

    status: DecisionStatus
    reason: DenialReason | None = None
    resource: ResourceTag | None = None
    action: CrudAction | None = None
    profile_name: str | None = None

    @classmethod
    def allowed(cls) -> "Decision":
        return cls(DecisionStatus.ALLOWED)

    @classmethod
    def pending(cls) -> "Decision":
        return cls(DecisionStatus.PENDING)

    @classmethod
    def denied(
        cls,
        reason: DenialReason,
        resource: ResourceTag | None = None,
        action: CrudAction | None = None,
        profile_name: str | None = None,
    ) -> "Decision":
        return cls(
            DecisionStatus.DENIED,
            reason=reason,
            resource=resource,
            action=action,
            profile_name=profile_name,
        )

    @property
    def is_allowed(self) -> bool:
        return self.status is DecisionStatus.ALLOWED

    @property
    def is_denied(self) -> bool:
        return self.status is DecisionStatus.DENIED

    @property
    def is_pending(self) -> bool:
        return self.status is DecisionStatus.PENDING

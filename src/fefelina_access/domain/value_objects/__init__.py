"""Domain value objects."""

from fefelina_access.domain.value_objects.access_level import AccessLevel
from fefelina_access.domain.value_objects.crud_action import CrudAction
from fefelina_access.domain.value_objects.decision import (
    Decision,
    DecisionStatus,
    DenialReason,
)
from fefelina_access.domain.value_objects.field_policy import (
    DEFAULT_FIELD_POLICY,
    FULL_ACCESS,
    NO_ACCESS,
    PENDING,
    FieldPolicy,
    PendingValue,
)
from fefelina_access.domain.value_objects.notice import (
    AccessChange,
    AccessNotice,
    LoadBoundary,
)
from fefelina_access.domain.value_objects.resource_tag import ResourceTag
from fefelina_access.domain.value_objects.session import (
    SessionEvent,
    SessionEventKind,
    SessionState,
    SessionTransition,
    TransitionKind,
)
from fefelina_access.domain.value_objects.table_tag import TableTag

__all__ = [
    "DEFAULT_FIELD_POLICY",
    "FULL_ACCESS",
    "NO_ACCESS",
    "PENDING",
    "AccessChange",
    "AccessLevel",
    "AccessNotice",
    "CrudAction",
    "Decision",
    "DecisionStatus",
    "DenialReason",
    "FieldPolicy",
    "LoadBoundary",
    "PendingValue",
    "ResourceTag",
    "SessionEvent",
    "SessionEventKind",
    "SessionState",
    "SessionTransition",
    "TableTag",
    "TransitionKind",
]

"""Effective read/write policy for a single field."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class FieldPolicy:
    """Resolved field visibility. Writable fields are always readable."""

    can_read: bool
    can_write: bool


FULL_ACCESS = FieldPolicy(can_read=True, can_write=True)
NO_ACCESS = FieldPolicy(can_read=False, can_write=False)
DEFAULT_FIELD_POLICY = FieldPolicy(can_read=True, can_write=False)


class PendingValue(Enum):
    """Sentinel returned by masking helpers while field rules are loading."""

    PENDING = "pending"

    def __repr__(self) -> str:
        return "<pending>"


PENDING = PendingValue.PENDING

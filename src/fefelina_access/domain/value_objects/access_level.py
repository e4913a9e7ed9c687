"""Access level carried by a sharing grant."""

from enum import StrEnum


class AccessLevel(StrEnum):
    """Level of access delegated to the grantee."""

    READ = "read"
    WRITE = "write"

"""Authentication session state and lifecycle events."""

from dataclasses import dataclass
from enum import StrEnum


class SessionEventKind(StrEnum):
    """Events announced by the session transport."""

    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"
    TOKEN_REFRESHED = "token_refreshed"


class TransitionKind(StrEnum):
    """Real session transitions that invalidate authorization state."""

    LOGIN = "login"
    LOGOUT = "logout"


@dataclass(frozen=True)
class SessionState:
    """Current session - unauthenticated when identity is None."""

    identity: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


@dataclass(frozen=True)
class SessionEvent:
    """Raw event from the session transport."""

    kind: SessionEventKind
    identity: str | None = None


@dataclass(frozen=True)
class SessionTransition:
    """A real login or logout, stamped with the epoch it opened."""

    kind: TransitionKind
    epoch: int
    session: SessionState

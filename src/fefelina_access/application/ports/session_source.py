"""Session source port - the authentication transport."""

from collections.abc import Callable
from typing import Protocol

from fefelina_access.domain.value_objects import SessionEvent


class SessionSource(Protocol):
    """Announces sign-in, sign-out and token refresh events."""

    async def current_identity(self) -> str | None: ...

    def subscribe(self, listener: Callable[[SessionEvent], None]) -> Callable[[], None]: ...

"""Session monitor - turns raw auth events into real login/logout transitions."""

import logging
from collections.abc import Callable

from fefelina_access.application.ports import SessionSource
from fefelina_access.domain.value_objects import (
    SessionEvent,
    SessionEventKind,
    SessionState,
    SessionTransition,
    TransitionKind,
)

logger = logging.getLogger(__name__)

TransitionListener = Callable[[SessionTransition], None]


class SessionMonitor:
    """Tracks the session lifecycle and advances the session epoch.

    Only an identity change counts as a transition: a sign-in for the
    identity already held (tab regaining focus) and token refreshes are
    ignored. Signing in as a different identity without an intervening
    sign-out is a transition too. Listeners are called synchronously, so
    cached state is cleared before ``handle`` returns. A failing listener is
    logged and skipped.
    """

    def __init__(self) -> None:
        self._state = SessionState()
        self._epoch = 0
        self._listeners: list[TransitionListener] = []
        self._detach: Callable[[], None] | None = None

    @property
    def epoch(self) -> int:
        return self._epoch

    def current_session(self) -> SessionState:
        return self._state

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        """Register listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def attach(self, source: SessionSource) -> None:
        """Follow source events, starting from its current identity."""
        self.detach()
        self._detach = source.subscribe(self.handle)
        identity = await source.current_identity()
        if identity:
            self.handle(SessionEvent(SessionEventKind.SIGNED_IN, identity))

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    def handle(self, event: SessionEvent) -> SessionTransition | None:
        """Apply a transport event; returns the transition it caused, if any."""
        if event.kind is SessionEventKind.TOKEN_REFRESHED:
            logger.debug("Token refreshed", extra={"epoch": self._epoch})
            return None

        if event.kind is SessionEventKind.SIGNED_IN:
            if not event.identity:
                logger.warning("Ignoring sign-in event without identity")
                return None
            if event.identity == self._state.identity:
                logger.debug(
                    "Redundant sign-in ignored",
                    extra={"identity": event.identity, "epoch": self._epoch},
                )
                return None
            return self._advance(TransitionKind.LOGIN, SessionState(event.identity))

        if not self._state.is_authenticated:
            logger.debug("Sign-out while unauthenticated ignored")
            return None
        return self._advance(TransitionKind.LOGOUT, SessionState())

    def renew(self) -> SessionTransition | None:
        """Open a new epoch for the current identity, forcing a full reload."""
        if not self._state.is_authenticated:
            return None
        return self._advance(TransitionKind.LOGIN, self._state)

    def _advance(
        self, kind: TransitionKind, state: SessionState
    ) -> SessionTransition:
        self._epoch += 1
        self._state = state
        transition = SessionTransition(kind=kind, epoch=self._epoch, session=state)
        logger.info(
            "Session %s",
            kind.value,
            extra={"epoch": self._epoch, "identity": state.identity},
        )
        for listener in list(self._listeners):
            try:
                listener(transition)
            except Exception:
                logger.exception(
                    "Session transition listener failed",
                    extra={"epoch": self._epoch, "transition": kind.value},
                )
        return transition

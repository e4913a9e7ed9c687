"""Keycloak OIDC session source."""

import logging
from collections.abc import Callable

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from fefelina_access.domain.value_objects import SessionEvent, SessionEventKind

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionEvent], None]


class KeycloakSessionSource:
    """Announces session events for tokens validated by Keycloak.

    Every accepted token (sign-in or refresh) is introspected; an inactive
    token on refresh ends the session.
    """

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._identity: str | None = None
        self._listeners: list[SessionListener] = []

    async def current_identity(self) -> str | None:
        return self._identity

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, access_token: str) -> str | None:
        """Validate token and announce the sign-in. Returns the identity."""
        identity = self._introspect(access_token)
        if identity is None:
            return None
        self._identity = identity
        self._emit(SessionEvent(SessionEventKind.SIGNED_IN, identity))
        return identity

    def token_refreshed(self, access_token: str) -> None:
        """Announce a refreshed token; signs out if it is no longer active."""
        identity = self._introspect(access_token)
        if identity is None:
            self.sign_out()
            return
        if identity != self._identity:
            self._identity = identity
            self._emit(SessionEvent(SessionEventKind.SIGNED_IN, identity))
            return
        self._emit(SessionEvent(SessionEventKind.TOKEN_REFRESHED, identity))

    def sign_out(self, refresh_token: str | None = None) -> None:
        """End the Keycloak session (if a refresh token is given) and announce it."""
        if refresh_token:
            try:
                self._keycloak.logout(refresh_token)
            except KeycloakError:
                logger.warning("Keycloak logout failed", exc_info=True)
        self._identity = None
        self._emit(SessionEvent(SessionEventKind.SIGNED_OUT))

    def _introspect(self, token: str) -> str | None:
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError:
            logger.warning("Token introspection failed", exc_info=True)
            return None
        if not token_info.get("active"):
            return None
        return token_info.get("sub") or None

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

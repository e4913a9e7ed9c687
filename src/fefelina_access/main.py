"""Composition root - one gateway per runtime."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from fefelina_access import __version__
from fefelina_access.application.authorization import (
    DEFAULT_MASK_TOKEN,
    AuthorizationGateway,
    ProfileResolver,
    SessionMonitor,
)
from fefelina_access.application.ports import UnitOfWorkFactory
from fefelina_access.application.sharing import SharingGrantStore
from fefelina_access.application.use_cases.sharing.revoke_sharing import (
    RevokeSharingUseCase,
)
from fefelina_access.config import Settings, get_settings
from fefelina_access.infrastructure.auth.keycloak_session import KeycloakSessionSource
from fefelina_access.infrastructure.observability import configure_logging
from fefelina_access.infrastructure.persistence.postgres.connection import create_pool
from fefelina_access.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)

logger = logging.getLogger(__name__)


@dataclass
class AccessRuntime:
    """Wired engine handed to the UI layer."""

    gateway: AuthorizationGateway
    session_monitor: SessionMonitor
    session_source: KeycloakSessionSource


def build_gateway(
    unit_of_work_factory: UnitOfWorkFactory,
    session_monitor: SessionMonitor | None = None,
    mask_token: Any = DEFAULT_MASK_TOKEN,
) -> AuthorizationGateway:
    """Wire gateway and its collaborators over a unit-of-work factory."""
    grant_store = SharingGrantStore(unit_of_work_factory)
    return AuthorizationGateway(
        session_monitor=session_monitor or SessionMonitor(),
        profile_resolver=ProfileResolver(unit_of_work_factory),
        unit_of_work_factory=unit_of_work_factory,
        grant_store=grant_store,
        revoke_sharing=RevokeSharingUseCase(unit_of_work_factory, grant_store),
        mask_token=mask_token,
    )


@asynccontextmanager
async def access_runtime(settings: Settings | None = None) -> AsyncIterator[AccessRuntime]:
    """Open the pool, wire the gateway to Keycloak, and tear down on exit."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info(
        "Starting fefelina-access v%s",
        __version__,
        extra={"environment": settings.environment},
    )

    pool = create_pool(settings)
    await pool.open()
    try:
        session_monitor = SessionMonitor()
        session_source = KeycloakSessionSource(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        gateway = build_gateway(
            create_uow_factory(pool),
            session_monitor=session_monitor,
            mask_token=settings.mask_token,
        )
        await gateway.start(session_source)
        try:
            yield AccessRuntime(
                gateway=gateway,
                session_monitor=session_monitor,
                session_source=session_source,
            )
        finally:
            gateway.close()
            session_monitor.detach()
    finally:
        await pool.close()

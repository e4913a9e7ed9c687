"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from fefelina_access.domain.exceptions import BackingStoreUnavailable
from fefelina_access.infrastructure.persistence.postgres.assignment_repository import (
    PostgresAssignmentRepository,
)
from fefelina_access.infrastructure.persistence.postgres.field_permission_repository import (
    PostgresFieldPermissionRepository,
)
from fefelina_access.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from fefelina_access.infrastructure.persistence.postgres.profile_repository import (
    PostgresProfileRepository,
)
from fefelina_access.infrastructure.persistence.postgres.sharing_repository import (
    PostgresSharingRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: AbstractAsyncContextManager | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._profiles = PostgresProfileRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        self._field_permissions = PostgresFieldPermissionRepository(self._conn)
        self._sharing = PostgresSharingRepository(self._conn)
        self._assignments = PostgresAssignmentRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def profiles(self) -> PostgresProfileRepository:
        return self._profiles

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def field_permissions(self) -> PostgresFieldPermissionRepository:
        return self._field_permissions

    @property
    def sharing(self) -> PostgresSharingRepository:
        return self._sharing

    @property
    def assignments(self) -> PostgresAssignmentRepository:
        return self._assignments

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(
    pool: AsyncConnectionPool,
) -> Callable[[], AbstractAsyncContextManager[PostgresUnitOfWork]]:
    """Create UnitOfWork factory (async context manager).

    Driver and pool errors surface as ``BackingStoreUnavailable``.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as exc:
            raise BackingStoreUnavailable(str(exc)) from exc

    return factory

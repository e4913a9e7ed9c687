"""Unit tests for PostgreSQL adapters with a mocked connection."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import psycopg
import pytest

from fefelina_access.config import Settings
from fefelina_access.domain.entities import SharingGrant
from fefelina_access.domain.exceptions import BackingStoreUnavailable, GrantConflict
from fefelina_access.domain.value_objects import AccessLevel, ResourceTag
from fefelina_access.infrastructure.persistence.postgres.connection import create_pool
from fefelina_access.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from fefelina_access.infrastructure.persistence.postgres.sharing_repository import (
    PostgresSharingRepository,
)
from fefelina_access.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)


def _connection(*cursors: MagicMock) -> MagicMock:
    conn = MagicMock()
    conn.execute = AsyncMock(side_effect=list(cursors))
    return conn


def _cursor(fetchone=None, fetchall=None, rowcount: int = 0) -> MagicMock:
    cur = MagicMock()
    cur.fetchone = AsyncMock(return_value=fetchone)
    cur.fetchall = AsyncMock(return_value=fetchall or [])
    cur.rowcount = rowcount
    return cur


def _grant() -> SharingGrant:
    return SharingGrant(
        sharing_id=uuid4(),
        client_id=uuid4(),
        shared_by_user_id="andre",
        shared_with_user_id="bia",
        access_level=AccessLevel.READ,
        shared_at=datetime(2026, 3, 10, tzinfo=UTC),
    )


class TestPostgresPermissionRepository:
    """Tests for PostgresPermissionRepository."""

    @pytest.mark.asyncio
    async def test_unknown_resources_are_skipped(self) -> None:
        profile_id = uuid4()
        conn = _connection(
            _cursor(
                fetchall=[
                    ("clients", True, False, False, False),
                    ("usuarios", True, True, True, True),
                    ("visits", True, True, False, False),
                ]
            )
        )

        permissions = await PostgresPermissionRepository(conn).list_by_profile(profile_id)

        assert [p.resource for p in permissions] == [ResourceTag.CLIENTS, ResourceTag.VISITS]
        assert permissions[1].can_create is True
        assert conn.execute.await_args.args[1] == (profile_id,)


class TestPostgresSharingRepository:
    """Tests for PostgresSharingRepository."""

    @pytest.mark.asyncio
    async def test_create_returns_grant(self) -> None:
        grant = _grant()
        conn = _connection(_cursor(fetchone=(grant.sharing_id,)))

        assert await PostgresSharingRepository(conn).create(grant) is grant
        sql, params = conn.execute.await_args.args
        assert "ON CONFLICT (client_id, shared_with_user_id) DO NOTHING" in sql
        assert params[4] == "read"
        assert params[5] is None

    @pytest.mark.asyncio
    async def test_create_conflict_reports_existing(self) -> None:
        grant = _grant()
        existing_id = uuid4()
        existing_row = (
            existing_id,
            grant.client_id,
            "fernanda",
            "bia",
            "write",
            None,
            datetime(2026, 3, 1, tzinfo=UTC),
        )
        conn = _connection(_cursor(fetchone=None), _cursor(fetchone=existing_row))

        with pytest.raises(GrantConflict) as exc_info:
            await PostgresSharingRepository(conn).create(grant)

        assert exc_info.value.existing.sharing_id == existing_id
        assert exc_info.value.existing.access_level is AccessLevel.WRITE

    @pytest.mark.asyncio
    async def test_delete_reports_rowcount(self) -> None:
        conn = _connection(_cursor(rowcount=1), _cursor(rowcount=0))
        repo = PostgresSharingRepository(conn)

        assert await repo.delete(uuid4(), "bia") is True
        assert await repo.delete(uuid4(), "bia") is False


class TestUnitOfWorkFactory:
    """Tests for create_uow_factory."""

    @pytest.mark.asyncio
    async def test_driver_errors_become_backing_store_unavailable(self) -> None:
        connection_cm = MagicMock()
        connection_cm.__aenter__ = AsyncMock(side_effect=psycopg.OperationalError("down"))
        pool = MagicMock()
        pool.connection.return_value = connection_cm

        factory = create_uow_factory(pool)

        with pytest.raises(BackingStoreUnavailable):
            async with factory():
                pass

    @pytest.mark.asyncio
    async def test_commits_on_success(self) -> None:
        conn = MagicMock()
        conn.commit = AsyncMock()
        conn.rollback = AsyncMock()
        connection_cm = MagicMock()
        connection_cm.__aenter__ = AsyncMock(return_value=conn)
        connection_cm.__aexit__ = AsyncMock(return_value=False)
        pool = MagicMock()
        pool.connection.return_value = connection_cm

        async with create_uow_factory(pool)() as uow:
            assert uow.sharing is not None

        conn.commit.assert_awaited_once()
        conn.rollback.assert_not_awaited()


class TestCreatePool:
    """Tests for create_pool."""

    def test_pool_follows_settings_and_starts_closed(self) -> None:
        settings = Settings(
            _env_file=None,
            database_url="postgresql://app@db:5432/fefelina",
            database_pool_min_size=2,
            database_pool_max_size=8,
            database_pool_timeout=3.5,
        )
        with patch(
            "fefelina_access.infrastructure.persistence.postgres.connection.AsyncConnectionPool"
        ) as pool_cls:
            create_pool(settings)

        kwargs = pool_cls.call_args.kwargs
        assert kwargs["conninfo"] == "postgresql://app@db:5432/fefelina"
        assert (kwargs["min_size"], kwargs["max_size"], kwargs["timeout"]) == (2, 8, 3.5)
        assert kwargs["name"] == "fefelina-access"
        assert kwargs["open"] is False

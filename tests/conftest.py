"""Pytest fixtures for fefelina-access tests."""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from fefelina_access.application.authorization import SessionMonitor
from fefelina_access.application.sharing import SharingGrantStore
from fefelina_access.domain.entities import FieldPermission, Permission, Profile
from fefelina_access.domain.value_objects import ResourceTag, TableTag
from fefelina_access.main import build_gateway

from tests.fakes import FakeStore, make_uow_factory

PARTNER_ID = UUID("00000000-0000-0000-0000-000000000002")
ADMIN_ID = UUID("00000000-0000-0000-0000-000000000001")


@pytest.fixture
def admin_profile() -> Profile:
    return Profile(id=ADMIN_ID, name="Administrador", is_admin=True)


@pytest.fixture
def partner_profile() -> Profile:
    return Profile(id=PARTNER_ID, name="Parceiro")


@pytest.fixture
def store(admin_profile: Profile, partner_profile: Profile) -> FakeStore:
    """Store with an admin user, two partner users and the Partner grants.

    Partner may read (not update) clients, has no visits row, and cannot
    see ``clients.valor_diaria``.
    """
    store = FakeStore()
    store.add_user("fernanda", admin_profile, full_name="Fernanda")
    store.add_user("andre", partner_profile, full_name="Andre")
    store.add_user("bia", partner_profile, full_name="Bia")
    store.permissions.append(
        Permission(
            profile_id=PARTNER_ID,
            resource=ResourceTag.CLIENTS,
            can_read=True,
            can_update=False,
        )
    )
    store.field_permissions.append(
        FieldPermission(
            profile_id=PARTNER_ID,
            table_name=TableTag.CLIENTS,
            field_name="valor_diaria",
            can_read=False,
            can_write=False,
        )
    )
    return store


@pytest.fixture
def uow_factory(store: FakeStore):
    return make_uow_factory(store)


@pytest.fixture
def monitor() -> SessionMonitor:
    return SessionMonitor()


@pytest.fixture
def gateway(uow_factory, monitor: SessionMonitor):
    """Gateway following monitor; attach() is left to each test."""
    gw = build_gateway(uow_factory, session_monitor=monitor, mask_token="••••")
    yield gw
    gw.close()


@pytest.fixture
def grant_store(uow_factory) -> SharingGrantStore:
    return SharingGrantStore(uow_factory)


@pytest.fixture
def client_id(store: FakeStore) -> UUID:
    cid = uuid4()
    store.client_names[cid] = "Dona Marta"
    return cid

"""Unit tests for PermissionMatrix."""

import pytest

from fefelina_access.application.authorization import PermissionMatrix
from fefelina_access.domain.value_objects import CrudAction, ResourceTag

from tests.fakes import FakeStore


@pytest.mark.asyncio
async def test_partner_grants(store: FakeStore, uow_factory) -> None:
    """Partner reads but cannot update clients and has no visits access."""
    partner = store.user_profiles["andre"]
    matrix = await PermissionMatrix.load(partner, uow_factory)

    assert matrix.can_read(ResourceTag.CLIENTS) is True
    assert matrix.can_update(ResourceTag.CLIENTS) is False
    assert matrix.authorize(ResourceTag.VISITS, CrudAction.READ) is False


@pytest.mark.asyncio
async def test_missing_row_denies_every_action(store: FakeStore, uow_factory) -> None:
    matrix = await PermissionMatrix.load(store.user_profiles["andre"], uow_factory)
    for action in CrudAction:
        assert matrix.authorize(ResourceTag.FINANCEIRO, action) is False


@pytest.mark.asyncio
async def test_admin_bypasses_every_resource_and_action(
    store: FakeStore, uow_factory
) -> None:
    """Administrators are allowed everything without a grant lookup."""
    matrix = await PermissionMatrix.load(store.user_profiles["fernanda"], uow_factory)

    for resource in ResourceTag:
        for action in CrudAction:
            assert matrix.authorize(resource, action) is True
    assert "permissions" not in store.calls


def test_deny_all_without_profile() -> None:
    matrix = PermissionMatrix.deny_all()
    assert matrix.profile is None
    assert matrix.is_admin is False
    for resource in ResourceTag:
        assert matrix.can_read(resource) is False


@pytest.mark.asyncio
async def test_store_failure_falls_back_to_no_grants(
    store: FakeStore, uow_factory
) -> None:
    """Backing store errors leave the profile with no resource access."""
    store.failures.add("permissions")
    errors: list[str] = []

    matrix = await PermissionMatrix.load(
        store.user_profiles["andre"], uow_factory, on_error=errors.append
    )

    assert matrix.can_read(ResourceTag.CLIENTS) is False
    assert matrix.load_error == "permissions fetch failed"
    assert errors == ["permissions fetch failed"]


@pytest.mark.asyncio
async def test_convenience_projections_match_authorize(
    store: FakeStore, uow_factory
) -> None:
    matrix = await PermissionMatrix.load(store.user_profiles["andre"], uow_factory)
    for resource in ResourceTag:
        assert matrix.can_read(resource) == matrix.authorize(resource, CrudAction.READ)
        assert matrix.can_create(resource) == matrix.authorize(resource, CrudAction.CREATE)
        assert matrix.can_update(resource) == matrix.authorize(resource, CrudAction.UPDATE)
        assert matrix.can_delete(resource) == matrix.authorize(resource, CrudAction.DELETE)

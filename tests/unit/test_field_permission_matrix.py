"""Unit tests for FieldPermissionMatrix."""

import asyncio

import pytest

from fefelina_access.application.authorization import FieldPermissionMatrix
from fefelina_access.domain.entities import FieldPermission
from fefelina_access.domain.exceptions import ValidationError
from fefelina_access.domain.value_objects import PENDING, TableTag

from tests.conftest import PARTNER_ID
from tests.fakes import FakeStore

MASK = "••••"


def _matrix(store: FakeStore, uow_factory, user_id: str = "andre", **kwargs) -> FieldPermissionMatrix:
    return FieldPermissionMatrix(store.user_profiles[user_id], uow_factory, **kwargs)


@pytest.mark.asyncio
async def test_field_without_row_is_readable_not_writable(
    store: FakeStore, uow_factory
) -> None:
    """clients.telefone has no row for Partner: shown, not editable."""
    matrix = _matrix(store, uow_factory)
    await matrix.load(TableTag.CLIENTS)

    assert matrix.can_read("clients", "telefone") is True
    assert matrix.can_write("clients", "telefone") is False
    assert matrix.mask("clients", "telefone", "+55 47 99999-0000", MASK) == "+55 47 99999-0000"


@pytest.mark.asyncio
async def test_unreadable_field_is_masked_and_filtered(
    store: FakeStore, uow_factory
) -> None:
    """clients.valor_diaria is hidden from Partner."""
    matrix = _matrix(store, uow_factory)
    await matrix.load("clients")

    assert matrix.mask("clients", "valor_diaria", 120, MASK) == MASK
    filtered = matrix.filter_object(
        "clients", {"nome": "Dona Marta", "telefone": "+55", "valor_diaria": 120}
    )
    assert filtered == {"nome": "Dona Marta", "telefone": "+55"}


@pytest.mark.asyncio
async def test_stored_write_without_read_is_not_writable(
    store: FakeStore, uow_factory
) -> None:
    store.field_permissions.append(
        FieldPermission(
            profile_id=PARTNER_ID,
            table_name=TableTag.CLIENTS,
            field_name="email",
            can_read=False,
            can_write=True,
        )
    )
    matrix = _matrix(store, uow_factory)
    await matrix.load(TableTag.CLIENTS)

    assert matrix.can_write(TableTag.CLIENTS, "email") is False
    assert matrix.can_read(TableTag.CLIENTS, "email") is False


@pytest.mark.asyncio
async def test_readable_writable_row(store: FakeStore, uow_factory) -> None:
    store.field_permissions.append(
        FieldPermission(
            profile_id=PARTNER_ID,
            table_name=TableTag.PETS,
            field_name="observacoes",
            can_read=True,
            can_write=True,
        )
    )
    matrix = _matrix(store, uow_factory)
    await matrix.load(TableTag.PETS)

    assert matrix.can_write(TableTag.PETS, "observacoes") is True
    assert matrix.can_read(TableTag.PETS, "observacoes") is True


@pytest.mark.asyncio
async def test_admin_bypasses_without_fetch(store: FakeStore, uow_factory) -> None:
    matrix = _matrix(store, uow_factory, user_id="fernanda")

    for table in TableTag:
        assert matrix.is_loaded(table)
        assert matrix.can_read(table, "valor_diaria") is True
        assert matrix.can_write(table, "valor_diaria") is True
    assert matrix.mask(TableTag.CLIENTS, "valor_diaria", 120, MASK) == 120
    assert "field_permissions" not in store.calls


def test_no_profile_denies_everything() -> None:
    matrix = FieldPermissionMatrix.deny_all()

    assert matrix.can_read(TableTag.CLIENTS, "nome") is False
    assert matrix.can_write(TableTag.CLIENTS, "nome") is False
    assert matrix.mask(TableTag.CLIENTS, "nome", "Dona Marta", MASK) == MASK
    assert matrix.filter_object(TableTag.CLIENTS, {"nome": "Dona Marta"}) == {}


@pytest.mark.asyncio
async def test_pending_while_table_loads(store: FakeStore, uow_factory) -> None:
    """Masking returns the pending sentinel, never a guess, until rules arrive."""
    gate = asyncio.Event()
    store.gates["field_permissions"] = gate
    matrix = _matrix(store, uow_factory)

    assert matrix.mask("clients", "telefone", "+55", MASK) is PENDING
    assert matrix.is_loading(TableTag.CLIENTS)
    assert matrix.can_read("clients", "telefone") is False
    assert matrix.filter_object("clients", {"telefone": "+55"}) == {"telefone": PENDING}

    gate.set()
    await matrix.load(TableTag.CLIENTS)

    assert not matrix.is_loading(TableTag.CLIENTS)
    assert matrix.mask("clients", "telefone", "+55", MASK) == "+55"
    assert store.calls.count("field_permissions") == 1


@pytest.mark.asyncio
async def test_tables_are_cached(store: FakeStore, uow_factory) -> None:
    matrix = _matrix(store, uow_factory)
    await matrix.load(TableTag.CLIENTS)
    await matrix.load(TableTag.CLIENTS)
    await matrix.load(TableTag.VISITS)

    assert store.calls.count("field_permissions") == 2


@pytest.mark.asyncio
async def test_store_failure_uses_default_policy(store: FakeStore, uow_factory) -> None:
    """Failed fetch: reads allowed, writes denied, notice reported."""
    store.failures.add("field_permissions")
    errors: list[tuple[TableTag, str]] = []
    matrix = _matrix(store, uow_factory, on_error=lambda t, m: errors.append((t, m)))

    await matrix.load(TableTag.CLIENTS)

    assert matrix.can_read(TableTag.CLIENTS, "valor_diaria") is True
    assert matrix.can_write(TableTag.CLIENTS, "valor_diaria") is False
    assert errors == [(TableTag.CLIENTS, "field_permissions fetch failed")]


@pytest.mark.asyncio
async def test_stale_result_is_discarded(store: FakeStore, uow_factory) -> None:
    current_epoch = {"value": 1}
    gate = asyncio.Event()
    store.gates["field_permissions"] = gate
    matrix = _matrix(
        store,
        uow_factory,
        epoch=1,
        is_current=lambda epoch: epoch == current_epoch["value"],
    )

    task = matrix.request(TableTag.CLIENTS)
    current_epoch["value"] = 2
    gate.set()
    await task

    assert not matrix.is_loaded(TableTag.CLIENTS)


@pytest.mark.asyncio
async def test_closed_matrix_ignores_results(store: FakeStore, uow_factory) -> None:
    gate = asyncio.Event()
    store.gates["field_permissions"] = gate
    matrix = _matrix(store, uow_factory)

    task = matrix.request(TableTag.CLIENTS)
    matrix.close()
    gate.set()
    await task

    assert not matrix.is_loaded(TableTag.CLIENTS)


def test_unknown_table_is_rejected() -> None:
    with pytest.raises(ValidationError):
        FieldPermissionMatrix.deny_all().can_read("usuarios", "nome")

"""Unit tests for the pure defaulting policies."""

from uuid import uuid4

import pytest

from fefelina_access.domain.entities import FieldPermission, Permission
from fefelina_access.domain.exceptions import ValidationError
from fefelina_access.domain.policies import resolve_field_policy, resolve_resource_access
from fefelina_access.domain.value_objects import (
    DEFAULT_FIELD_POLICY,
    CrudAction,
    FieldPolicy,
    ResourceTag,
    TableTag,
)


def _field(can_read: bool, can_write: bool) -> FieldPermission:
    return FieldPermission(
        profile_id=uuid4(),
        table_name=TableTag.CLIENTS,
        field_name="telefone",
        can_read=can_read,
        can_write=can_write,
    )


@pytest.mark.parametrize("action", list(CrudAction))
def test_missing_resource_row_denies_every_action(action: CrudAction) -> None:
    assert resolve_resource_access(None, action) is False


def test_resource_row_flags_map_to_actions() -> None:
    row = Permission(
        profile_id=uuid4(),
        resource=ResourceTag.CLIENTS,
        can_read=True,
        can_create=False,
        can_update=True,
        can_delete=False,
    )
    assert resolve_resource_access(row, CrudAction.READ) is True
    assert resolve_resource_access(row, CrudAction.CREATE) is False
    assert resolve_resource_access(row, CrudAction.UPDATE) is True
    assert resolve_resource_access(row, CrudAction.DELETE) is False


def test_missing_field_row_reads_but_does_not_write() -> None:
    policy = resolve_field_policy(None)
    assert policy == DEFAULT_FIELD_POLICY
    assert policy.can_read is True
    assert policy.can_write is False


@pytest.mark.parametrize(
    ("can_read", "can_write", "expected"),
    [
        (True, True, FieldPolicy(can_read=True, can_write=True)),
        (True, False, FieldPolicy(can_read=True, can_write=False)),
        (False, False, FieldPolicy(can_read=False, can_write=False)),
        (False, True, FieldPolicy(can_read=False, can_write=False)),
    ],
)
def test_write_implies_read(can_read: bool, can_write: bool, expected: FieldPolicy) -> None:
    """A stored write flag never makes an unreadable field writable."""
    policy = resolve_field_policy(_field(can_read, can_write))
    assert policy == expected
    if policy.can_write:
        assert policy.can_read


def test_unknown_resource_fails_fast() -> None:
    with pytest.raises(ValidationError, match="visitz"):
        ResourceTag.parse("visitz")


def test_unknown_table_fails_fast() -> None:
    with pytest.raises(ValidationError, match="usuarios"):
        TableTag.parse("usuarios")


def test_unknown_action_fails_fast() -> None:
    with pytest.raises(ValidationError):
        CrudAction.parse("approve")


def test_known_tags_parse() -> None:
    assert ResourceTag.parse("visits") is ResourceTag.VISITS
    assert TableTag.parse(TableTag.PETS) is TableTag.PETS
    assert CrudAction.parse("delete") is CrudAction.DELETE

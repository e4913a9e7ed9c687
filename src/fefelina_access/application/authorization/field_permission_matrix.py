"""Field-level security matrix, loaded lazily per table."""

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from fefelina_access.application.ports import UnitOfWorkFactory
from fefelina_access.domain.entities import FieldPermission, UserProfile
from fefelina_access.domain.exceptions import BackingStoreUnavailable
from fefelina_access.domain.policies import resolve_field_policy
from fefelina_access.domain.value_objects import (
    FULL_ACCESS,
    NO_ACCESS,
    PENDING,
    FieldPolicy,
    TableTag,
)

logger = logging.getLogger(__name__)


class FieldPermissionMatrix:
    """Per-table field read/write rules for one profile and one epoch.

    Tables are fetched on first use and cached for the life of the matrix.
    Until a table is loaded its fields are neither readable nor writable,
    and masking helpers return ``PENDING`` instead of guessing. Results
    that arrive after the epoch has moved on are dropped.
    """

    def __init__(
        self,
        profile: UserProfile | None,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        *,
        epoch: int = 0,
        is_current: Callable[[int], bool] | None = None,
        on_error: Callable[[TableTag, str], None] | None = None,
    ) -> None:
        self._profile = profile
        self._uow_factory = unit_of_work_factory
        self._epoch = epoch
        self._is_current = is_current or (lambda _epoch: True)
        self._on_error = on_error
        self._tables: dict[TableTag, dict[str, FieldPermission]] = {}
        self._pending: dict[TableTag, asyncio.Task[None]] = {}
        self._closed = False

    @classmethod
    def deny_all(cls) -> "FieldPermissionMatrix":
        return cls(None)

    @property
    def epoch(self) -> int:
        return self._epoch

    def close(self) -> None:
        """Stop accepting fetch results; in-flight loads are discarded."""
        self._closed = True

    def is_loaded(self, table: TableTag) -> bool:
        if self._profile is None or self._profile.is_admin:
            return True
        return table in self._tables

    def is_loading(self, table: TableTag) -> bool:
        return not self.is_loaded(table) and table in self._pending

    def request(self, table: TableTag) -> asyncio.Task[None] | None:
        """Schedule a fetch of table rules unless cached or already running."""
        if self.is_loaded(table):
            return None
        task = self._pending.get(table)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._fetch(table))
            self._pending[table] = task
        return task

    async def load(self, table: TableTag | str) -> None:
        """Fetch table rules and wait for them."""
        task = self.request(TableTag.parse(table))
        if task is not None:
            await task

    def policy(self, table: TableTag, field: str) -> FieldPolicy | None:
        """Effective policy, or None while the table is not loaded."""
        if self._profile is None:
            return NO_ACCESS
        if self._profile.is_admin:
            return FULL_ACCESS
        rows = self._tables.get(table)
        if rows is None:
            return None
        return resolve_field_policy(rows.get(field))

    def can_read(self, table: TableTag | str, field: str) -> bool:
        policy = self._policy_or_request(TableTag.parse(table), field)
        return policy is not None and policy.can_read

    def can_write(self, table: TableTag | str, field: str) -> bool:
        policy = self._policy_or_request(TableTag.parse(table), field)
        return policy is not None and policy.can_write

    def mask(
        self, table: TableTag | str, field: str, value: Any, mask_token: Any
    ) -> Any:
        """Value if readable, mask_token if not, ``PENDING`` while loading."""
        policy = self._policy_or_request(TableTag.parse(table), field)
        if policy is None:
            return PENDING
        return value if policy.can_read else mask_token

    def filter_object(
        self, table: TableTag | str, obj: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Shallow copy keeping readable keys; every key maps to ``PENDING`` while loading."""
        table = TableTag.parse(table)
        if not self.is_loaded(table):
            self._schedule(table)
            return {key: PENDING for key in obj}
        return {
            key: value
            for key, value in obj.items()
            if self._policy_or_request(table, key).can_read
        }

    def _policy_or_request(self, table: TableTag, field: str) -> FieldPolicy | None:
        policy = self.policy(table, field)
        if policy is None:
            self._schedule(table)
        return policy

    def _schedule(self, table: TableTag) -> None:
        try:
            self.request(table)
        except RuntimeError:
            # No running loop; caller has to await load() explicitly.
            logger.debug("Cannot schedule field rules fetch for %s", table)

    async def _fetch(self, table: TableTag) -> None:
        error: str | None = None
        try:
            async with self._uow_factory() as uow:
                rows = await uow.field_permissions.list_by_table(
                    self._profile.profile_id, table
                )
        except BackingStoreUnavailable as exc:
            logger.exception(
                "Field permission fetch failed, using default field policy",
                extra={"table": table.value, "profile_id": str(self._profile.profile_id)},
            )
            rows = []
            error = str(exc)
        finally:
            self._pending.pop(table, None)

        if self._closed or not self._is_current(self._epoch):
            logger.debug(
                "Discarding stale field rules",
                extra={"table": table.value, "epoch": self._epoch},
            )
            return

        self._tables[table] = {row.field_name: row for row in rows}
        if error and self._on_error:
            self._on_error(table, error)

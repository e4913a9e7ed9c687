"""Resource-level CRUD permission matrix for one resolved profile."""

import logging
from collections.abc import Callable, Iterable

from fefelina_access.application.ports import UnitOfWorkFactory
from fefelina_access.domain.entities import Permission, UserProfile
from fefelina_access.domain.exceptions import BackingStoreUnavailable
from fefelina_access.domain.policies import resolve_resource_access
from fefelina_access.domain.value_objects import CrudAction, ResourceTag

logger = logging.getLogger(__name__)


class PermissionMatrix:
    """Answers ``authorize(resource, action)`` for one profile.

    Administrators bypass the grant lookup. Any resource without a row is
    denied. A matrix without a profile denies everything.
    """

    def __init__(
        self,
        profile: UserProfile | None,
        grants: Iterable[Permission] = (),
        load_error: str | None = None,
    ) -> None:
        self._profile = profile
        self._grants: dict[ResourceTag, Permission] = {g.resource: g for g in grants}
        self.load_error = load_error

    @classmethod
    def deny_all(cls) -> "PermissionMatrix":
        return cls(None)

    @classmethod
    async def load(
        cls,
        profile: UserProfile | None,
        unit_of_work_factory: UnitOfWorkFactory,
        on_error: Callable[[str], None] | None = None,
    ) -> "PermissionMatrix":
        """Fetch grants for profile; falls back to no grants on store failure."""
        if profile is None:
            return cls.deny_all()
        if profile.is_admin:
            return cls(profile)

        try:
            async with unit_of_work_factory() as uow:
                rows = await uow.permissions.list_by_profile(profile.profile_id)
        except BackingStoreUnavailable as exc:
            logger.exception(
                "Permission fetch failed, denying all resources",
                extra={"profile_id": str(profile.profile_id)},
            )
            if on_error:
                on_error(str(exc))
            return cls(profile, load_error=str(exc))

        logger.debug(
            "Loaded %d permission rows",
            len(rows),
            extra={"profile_id": str(profile.profile_id)},
        )
        return cls(profile, rows)

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def is_admin(self) -> bool:
        return self._profile is not None and self._profile.is_admin

    def authorize(self, resource: ResourceTag, action: CrudAction) -> bool:
        if self._profile is None:
            return False
        if self._profile.is_admin:
            return True
        return resolve_resource_access(self._grants.get(resource), action)

    def can_read(self, resource: ResourceTag) -> bool:
        return self.authorize(resource, CrudAction.READ)

    def can_create(self, resource: ResourceTag) -> bool:
        return self.authorize(resource, CrudAction.CREATE)

    def can_update(self, resource: ResourceTag) -> bool:
        return self.authorize(resource, CrudAction.UPDATE)

    def can_delete(self, resource: ResourceTag) -> bool:
        return self.authorize(resource, CrudAction.DELETE)

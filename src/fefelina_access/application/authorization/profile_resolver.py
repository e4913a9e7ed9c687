"""Profile resolver - identity to usable profile, failing closed."""

import logging
from collections.abc import Callable

from fefelina_access.application.ports import UnitOfWorkFactory
from fefelina_access.domain.entities import UserProfile
from fefelina_access.domain.exceptions import (
    BackingStoreUnavailable,
    IdentityUnresolved,
    ProfileInactive,
)

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Loads the profile assignment of an identity.

    Missing, inactive and unreadable profiles all resolve to ``None``;
    callers cannot tell them apart from an anonymous session.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def resolve(
        self,
        identity: str | None,
        on_error: Callable[[str], None] | None = None,
    ) -> UserProfile | None:
        """Resolve identity to an active profile, or None."""
        try:
            return await self.require(identity)
        except IdentityUnresolved as exc:
            logger.info("No profile for identity: %s", exc, extra={"identity": identity})
        except ProfileInactive as exc:
            logger.warning("Inactive profile: %s", exc, extra={"identity": identity})
        except BackingStoreUnavailable as exc:
            logger.exception("Profile lookup failed", extra={"identity": identity})
            if on_error:
                on_error(str(exc))
        return None

    async def require(self, identity: str | None) -> UserProfile:
        """Resolve identity or raise the reason it has no usable profile."""
        if not identity:
            raise IdentityUnresolved("No authenticated identity")

        async with self._uow_factory() as uow:
            user_profile = await uow.profiles.get_by_user_id(identity)

        if user_profile is None:
            raise IdentityUnresolved(f"No profile assigned to {identity}")
        if not user_profile.is_active:
            raise ProfileInactive(f"User {identity} is deactivated")
        if not user_profile.profile.is_active:
            raise ProfileInactive(f"Profile {user_profile.profile.name} is deactivated")
        return user_profile

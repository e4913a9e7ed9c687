"""Profile repository port."""

from typing import Protocol

from fefelina_access.domain.entities import ActiveUser, UserProfile


class ProfileRepository(Protocol):
    """Port for user profile assignments."""

    async def get_by_user_id(self, user_id: str) -> UserProfile | None: ...

    async def list_active(self) -> list[ActiveUser]: ...

"""Profile (role) and user assignment entities."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Profile:
    """Profile - a role carrying resource and field permission grants."""

    id: UUID
    name: str
    is_admin: bool = False
    is_active: bool = True
    description: str | None = None


@dataclass
class UserProfile:
    """Assignment of one identity to one profile."""

    id: UUID
    user_id: str
    profile: Profile
    full_name: str
    email: str
    is_active: bool = True
    avatar_ref: str | None = None
    phone: str | None = None

    @property
    def profile_id(self) -> UUID:
        return self.profile.id

    @property
    def is_admin(self) -> bool:
        return self.profile.is_admin

    @property
    def is_usable(self) -> bool:
        """Usable only when both the assignment and the profile are active."""
        return self.is_active and self.profile.is_active


@dataclass
class ActiveUser:
    """Directory entry used when picking a sharing target."""

    user_id: str
    full_name: str
    email: str
    profile_name: str
    is_admin: bool = False

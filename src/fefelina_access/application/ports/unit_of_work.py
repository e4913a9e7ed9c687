"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from fefelina_access.application.ports.repositories import (
    AssignmentRepository,
    FieldPermissionRepository,
    PermissionRepository,
    ProfileRepository,
    SharingRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def profiles(self) -> ProfileRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def field_permissions(self) -> FieldPermissionRepository: ...

    @property
    def sharing(self) -> SharingRepository: ...

    @property
    def assignments(self) -> AssignmentRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances.

    Implementations raise ``BackingStoreUnavailable`` for transport failures.
    """

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...

"""Authorization gateway - the facade consumed by route guards and forms."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from fefelina_access.application.authorization.field_permission_matrix import (
    FieldPermissionMatrix,
)
from fefelina_access.application.authorization.permission_matrix import PermissionMatrix
from fefelina_access.application.authorization.profile_resolver import ProfileResolver
from fefelina_access.application.authorization.session_monitor import SessionMonitor
from fefelina_access.application.dto import RevocationImpact
from fefelina_access.application.ports import SessionSource, UnitOfWorkFactory
from fefelina_access.application.sharing import SharingGrantStore
from fefelina_access.application.use_cases.sharing.revoke_sharing import (
    RevokeSharingUseCase,
)
from fefelina_access.domain.entities import ActiveUser, SharedWith, UserProfile
from fefelina_access.domain.exceptions import IdentityUnresolved
from fefelina_access.domain.value_objects import (
    PENDING,
    AccessChange,
    AccessLevel,
    AccessNotice,
    CrudAction,
    Decision,
    DenialReason,
    LoadBoundary,
    ResourceTag,
    SessionTransition,
    TableTag,
    TransitionKind,
)

logger = logging.getLogger(__name__)

DEFAULT_MASK_TOKEN = "••••••••••"

ChangeListener = Callable[[AccessChange], None]


class AuthorizationGateway:
    """Holds the current profile, its permission matrices and the sharing tools.

    One authorization cycle runs per session epoch: resolve the profile,
    then load its resource grants; field rules load lazily per table.
    Every real login or logout clears all cached state synchronously and
    starts a new cycle, and results of older cycles are dropped on arrival.
    """

    def __init__(
        self,
        session_monitor: SessionMonitor,
        profile_resolver: ProfileResolver,
        unit_of_work_factory: UnitOfWorkFactory,
        grant_store: SharingGrantStore,
        revoke_sharing: RevokeSharingUseCase,
        mask_token: Any = DEFAULT_MASK_TOKEN,
    ) -> None:
        self._monitor = session_monitor
        self._resolver = profile_resolver
        self._uow_factory = unit_of_work_factory
        self._grant_store = grant_store
        self._revoke_sharing = revoke_sharing
        self._mask_token = mask_token

        self._profile: UserProfile | None = None
        self._permissions = PermissionMatrix.deny_all()
        self._fields = FieldPermissionMatrix.deny_all()
        self._profile_loading = True
        self._permissions_loading = True
        self._cycle: asyncio.Task[None] | None = None
        self._cycle_epoch: int | None = None
        self._sharing_calls = 0
        self._notices: list[AccessNotice] = []
        self._listeners: list[ChangeListener] = []
        self._unsubscribe: Callable[[], None] | None = None

    # --- lifecycle ---

    async def start(self, source: SessionSource) -> None:
        """Follow source through the session monitor and load the first cycle."""
        self._subscribe_monitor()
        await self._monitor.attach(source)
        if self._cycle is None:
            self.attach()

    def attach(self) -> None:
        """Follow the session monitor, starting from its current session."""
        self._subscribe_monitor()
        session = self._monitor.current_session()
        if session.is_authenticated:
            if self._cycle_in_flight(self._monitor.epoch):
                logger.debug(
                    "Cycle already running for epoch", extra={"epoch": self._cycle_epoch}
                )
                return
            self._begin_cycle(self._monitor.epoch, session.identity)
        else:
            self._reset(loading=False)
            self._publish()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._fields.close()

    async def wait_until_ready(self) -> None:
        """Wait for the current authorization cycle, following newer ones."""
        while True:
            cycle = self._cycle
            if cycle is None:
                return
            await cycle
            if cycle is self._cycle:
                return

    async def refresh(self) -> None:
        """Reload profile and permissions for the current identity."""
        self._monitor.renew()
        await self.wait_until_ready()

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register listener for decision changes; returns unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- state ---

    @property
    def epoch(self) -> int:
        return self._monitor.epoch

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def is_admin(self) -> bool:
        return self._profile is not None and self._profile.is_admin

    @property
    def profile_loading(self) -> bool:
        return self._profile_loading

    @property
    def permissions_loading(self) -> bool:
        return self._permissions_loading

    @property
    def loading(self) -> bool:
        return self._profile_loading or self._permissions_loading

    def fields_loading(self, table: TableTag | str) -> bool:
        return self._fields.is_loading(TableTag.parse(table))

    @property
    def sharing_loading(self) -> bool:
        """True while a grant create, list or revoke call is in flight."""
        return self._sharing_calls > 0

    @property
    def notices(self) -> tuple[AccessNotice, ...]:
        return tuple(self._notices)

    # --- route/action guarding ---

    def can_access(
        self,
        resource: ResourceTag | str | None = None,
        action: CrudAction | str = CrudAction.READ,
        require_admin: bool = False,
    ) -> Decision:
        """Guard decision for a route or action."""
        tag = ResourceTag.parse(resource) if resource is not None else None
        action = CrudAction.parse(action)
        if self.loading:
            return Decision.pending()
        if self._profile is None:
            return Decision.denied(DenialReason.UNAUTHENTICATED, tag, action)

        profile_name = self._profile.profile.name
        if require_admin and not self._profile.is_admin:
            return Decision.denied(DenialReason.ADMIN_REQUIRED, tag, action, profile_name)
        if tag is None or self._permissions.authorize(tag, action):
            return Decision.allowed()
        return Decision.denied(DenialReason.MISSING_PERMISSION, tag, action, profile_name)

    def authorize(self, resource: ResourceTag | str, action: CrudAction | str) -> bool:
        return self._permissions.authorize(
            ResourceTag.parse(resource), CrudAction.parse(action)
        )

    def can_read(self, resource: ResourceTag | str) -> bool:
        return self.authorize(resource, CrudAction.READ)

    def can_create(self, resource: ResourceTag | str) -> bool:
        return self.authorize(resource, CrudAction.CREATE)

    def can_update(self, resource: ResourceTag | str) -> bool:
        return self.authorize(resource, CrudAction.UPDATE)

    def can_delete(self, resource: ResourceTag | str) -> bool:
        return self.authorize(resource, CrudAction.DELETE)

    # --- field-aware rendering ---

    async def load_fields(self, table: TableTag | str) -> None:
        """Fetch field rules of table for the current profile."""
        await self._fields.load(table)

    def can_read_field(self, table: TableTag | str, field: str) -> bool:
        return self._fields.can_read(table, field)

    def can_write_field(self, table: TableTag | str, field: str) -> bool:
        return self._fields.can_write(table, field)

    def mask(
        self,
        table: TableTag | str,
        field: str,
        value: Any,
        mask_token: Any = None,
    ) -> Any:
        """Value, mask token, or ``PENDING`` while the profile or table rules load."""
        if self._profile_loading:
            return PENDING
        token = self._mask_token if mask_token is None else mask_token
        return self._fields.mask(table, field, value, token)

    def filter_object(self, table: TableTag | str, obj: Mapping[str, Any]) -> dict[str, Any]:
        if self._profile_loading:
            return {key: PENDING for key in obj}
        return self._fields.filter_object(table, obj)

    # --- sharing ---

    async def share_client(
        self,
        client_id: UUID,
        grantee_id: str,
        access_level: AccessLevel | str = AccessLevel.READ,
        field_restrictions: dict[str, Any] | None = None,
    ) -> UUID:
        """Share client with grantee on behalf of the current user."""
        actor = self._require_profile()
        async with self._sharing_call():
            return await self._grant_store.create(
                client_id,
                grantee_id,
                AccessLevel(access_level),
                shared_by=actor.user_id,
                field_restrictions=field_restrictions,
            )

    async def list_grantees(self, client_id: UUID) -> list[SharedWith]:
        self._require_profile()
        async with self._sharing_call():
            return await self._grant_store.list_grantees(client_id)

    async def list_active_users(self) -> list[ActiveUser]:
        self._require_profile()
        async with self._sharing_call():
            return await self._grant_store.list_active_users()

    async def assess_revocation(self, client_id: UUID, grantee_id: str) -> RevocationImpact:
        self._require_profile()
        async with self._sharing_call():
            return await self._revoke_sharing.assess(client_id, grantee_id)

    async def revoke_sharing(
        self, client_id: UUID, grantee_id: str, *, confirmed: bool = False
    ) -> RevocationImpact:
        """Unshare client; unconfirmed calls raise when live assignments exist."""
        self._require_profile()
        async with self._sharing_call():
            return await self._revoke_sharing.execute(
                client_id, grantee_id, confirmed=confirmed
            )

    # --- internals ---

    @asynccontextmanager
    async def _sharing_call(self) -> AsyncIterator[None]:
        self._sharing_calls += 1
        try:
            yield
        finally:
            self._sharing_calls -= 1

    def _require_profile(self) -> UserProfile:
        if self._profile_loading or self._profile is None:
            raise IdentityUnresolved("No resolved profile for the current session")
        return self._profile

    def _subscribe_monitor(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._monitor.subscribe(self._on_transition)

    def _is_current(self, epoch: int) -> bool:
        return epoch == self._monitor.epoch

    def _cycle_in_flight(self, epoch: int) -> bool:
        return (
            self._cycle is not None
            and not self._cycle.done()
            and self._cycle_epoch == epoch
        )

    def _on_transition(self, transition: SessionTransition) -> None:
        self._notices.clear()
        if transition.kind is TransitionKind.LOGOUT:
            self._reset(loading=False)
            self._cycle = None
            self._cycle_epoch = None
            self._publish()
            return
        self._begin_cycle(transition.epoch, transition.session.identity)

    def _reset(self, loading: bool) -> None:
        self._fields.close()
        self._profile = None
        self._permissions = PermissionMatrix.deny_all()
        self._fields = FieldPermissionMatrix.deny_all()
        self._profile_loading = loading
        self._permissions_loading = loading

    def _begin_cycle(self, epoch: int, identity: str | None) -> None:
        self._cycle_epoch = epoch
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to load on: deny everything until refresh() runs inside one.
            logger.error(
                "Session transition outside a running event loop, denying access",
                extra={"epoch": epoch, "identity": identity},
            )
            self._reset(loading=False)
            self._cycle = None
            self._record(
                LoadBoundary.PROFILE, "Profile not loaded: no running event loop", epoch
            )
            self._publish()
            return

        self._reset(loading=True)
        self._cycle = loop.create_task(self._run_cycle(epoch, identity))
        self._publish()

    async def _run_cycle(self, epoch: int, identity: str | None) -> None:
        profile = await self._resolver.resolve(
            identity,
            on_error=lambda message: self._record(LoadBoundary.PROFILE, message, epoch),
        )
        if not self._is_current(epoch):
            logger.debug("Discarding stale profile", extra={"epoch": epoch})
            return

        self._profile = profile
        self._profile_loading = False
        if profile is None:
            self._permissions_loading = False
            self._publish()
            return

        self._fields = FieldPermissionMatrix(
            profile,
            self._uow_factory,
            epoch=epoch,
            is_current=self._is_current,
            on_error=lambda table, message: self._record(
                LoadBoundary.FIELD_PERMISSIONS, message, epoch, table
            ),
        )
        self._publish()

        matrix = await PermissionMatrix.load(
            profile,
            self._uow_factory,
            on_error=lambda message: self._record(LoadBoundary.PERMISSIONS, message, epoch),
        )
        if not self._is_current(epoch):
            logger.debug("Discarding stale permissions", extra={"epoch": epoch})
            return

        self._permissions = matrix
        self._permissions_loading = False
        logger.info(
            "Authorization ready",
            extra={
                "epoch": epoch,
                "profile": profile.profile.name,
                "is_admin": profile.is_admin,
            },
        )
        self._publish()

    def _record(
        self,
        boundary: LoadBoundary,
        message: str,
        epoch: int,
        table: TableTag | None = None,
    ) -> None:
        if not self._is_current(epoch):
            return
        self._notices.append(
            AccessNotice(boundary=boundary, message=message, epoch=epoch, table=table)
        )

    def _publish(self) -> None:
        change = AccessChange(
            epoch=self._monitor.epoch,
            loading=self.loading,
            authenticated=self._profile is not None,
        )
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Access change listener failed", extra={"epoch": change.epoch})

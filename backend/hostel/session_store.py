# hostel/session_store.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from . import schemas
from .errors import RemoteError, Result
from .repositories import AuthService, ProfileRepository, Subscription

logger = logging.getLogger(__name__)

StoreListener = Callable[["AuthContext"], None]


class AuthContext:
    """
    Identity of one dashboard client: session, user and resolved profile.

    `initialize()` reads the current session once and then follows the auth
    service's state-change events. A profile that cannot be loaded leaves
    `profile` as None; callers treat that as "no role" even with a session.
    """

    def __init__(self, auth: AuthService, profiles: ProfileRepository):
        self._auth = auth
        self._profiles = profiles
        self._listeners: List[StoreListener] = []
        self._subscription: Optional[Subscription] = None
        self.user: Optional[schemas.AuthUser] = None
        self.profile: Optional[schemas.Profile] = None
        self._session: Optional[schemas.AuthSession] = None
        self.loading = True

    # =========================================================
    # Lifecycle
    # =========================================================
    def initialize(self) -> "AuthContext":
        try:
            self._apply(self._auth.get_session())
        except Exception:
            logger.exception("[auth] error fetching initial user profile")
            self.profile = None
        finally:
            self.loading = False
        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(self._on_auth_event)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _on_auth_event(self, event: str, session: Optional[schemas.AuthSession]) -> None:
        logger.debug(f"[auth] event {event}")
        try:
            self._apply(session)
        except RemoteError as e:
            logger.warning(f"[auth] could not load profile after {event}: {e.message}")
            self.profile = None
        self.loading = False
        self._notify()

    def _apply(self, session: Optional[schemas.AuthSession]) -> None:
        self._session = session
        self.user = session.user if session else None
        self.profile = None
        if self.user is not None:
            self.profile = schemas.resolve_profile(self._profiles.get(self.user.id))

    # =========================================================
    # State
    # =========================================================
    @property
    def session(self) -> Optional[schemas.AuthSession]:
        # an expired session is dropped by the auth service, which emits SIGNED_OUT
        if self._session is not None and self._session.is_expired():
            self._auth.get_session()
            if self._session is not None and self._session.is_expired():
                self._apply(None)
        return self._session

    @property
    def role(self) -> Optional[str]:
        return self.profile.role if self.profile else None

    def is_admin(self) -> bool:
        return isinstance(self.profile, schemas.AdminProfile)

    def is_warden(self) -> bool:
        return isinstance(self.profile, schemas.WardenProfile)

    def is_student(self) -> bool:
        return isinstance(self.profile, schemas.StudentProfile)

    def is_staff(self) -> bool:
        return self.is_admin() or self.is_warden()

    def refresh_profile(self) -> Optional[schemas.Profile]:
        if self.user is None:
            return None
        try:
            self.profile = schemas.resolve_profile(self._profiles.get(self.user.id))
        except RemoteError as e:
            logger.warning(f"[auth] profile refresh failed: {e.message}")
            return self.profile
        self._notify()
        return self.profile

    # =========================================================
    # Operations
    # =========================================================
    def sign_up(self, data: schemas.SignUpIn) -> Result[schemas.AuthResponse]:
        try:
            return Result.success(self._auth.sign_up(data))
        except RemoteError as e:
            return Result.failure(e)

    def sign_in(self, data: schemas.SignInIn) -> Result[schemas.AuthResponse]:
        try:
            return Result.success(self._auth.sign_in(data))
        except RemoteError as e:
            return Result.failure(e)

    def sign_out(self) -> Result[None]:
        try:
            self._auth.sign_out()
            return Result.success(None)
        except RemoteError as e:
            return Result.failure(e)

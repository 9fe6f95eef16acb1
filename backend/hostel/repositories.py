# hostel/repositories.py
"""
Backend-neutral interfaces of the hosted service.

The dashboard only ever talks to a `Backend`: one auth service plus one
repository per entity. Two implementations exist, `hostel.crud` (SQLAlchemy,
procedures run in-process) and `hostel.remote` (hosted REST + auth API).
Every method returns pydantic rows and raises `RemoteError` on failure.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional

from . import schemas

# (event, session) -> None ; event is "SIGNED_IN" | "SIGNED_OUT"
AuthListener = Callable[[str, Optional[schemas.AuthSession]], None]

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


class Subscription:
    """Handle returned by `on_auth_state_change`; call `unsubscribe()` to stop listening."""

    def __init__(self, listeners: List[AuthListener], listener: AuthListener):
        self._listeners = listeners
        self._listener = listener

    def unsubscribe(self) -> None:
        if self._listener in self._listeners:
            self._listeners.remove(self._listener)


# =========================================================
# 🔑 AUTH
# =========================================================
class AuthService(ABC):
    def __init__(self) -> None:
        self._listeners: List[AuthListener] = []
        self._session: Optional[schemas.AuthSession] = None

    # ---- listeners
    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self._listeners, listener)

    def _emit(self, event: str, session: Optional[schemas.AuthSession]) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    def _adopt(self, session: Optional[schemas.AuthSession]) -> None:
        self._session = session
        if session is not None:
            self._emit(SIGNED_IN, session)

    # ---- session
    def get_session(self) -> Optional[schemas.AuthSession]:
        """Current session, or None. An expired session is dropped and reported as SIGNED_OUT."""
        if self._session is not None and self._session.is_expired():
            self._session = None
            self._emit(SIGNED_OUT, None)
        return self._session

    @property
    def access_token(self) -> Optional[str]:
        session = self.get_session()
        return session.access_token if session else None

    # ---- operations
    @abstractmethod
    def register(self, data: schemas.SignUpIn) -> schemas.AuthResponse:
        """Create an identity (and, server-side, its profile) without touching the current session."""

    def sign_up(self, data: schemas.SignUpIn) -> schemas.AuthResponse:
        res = self.register(data)
        if res.session is not None:
            self._adopt(res.session)
        return res

    @abstractmethod
    def sign_in(self, data: schemas.SignInIn) -> schemas.AuthResponse:
        ...

    @abstractmethod
    def sign_out(self) -> None:
        ...

    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        ...


# =========================================================
# 🧍 ENTITY REPOSITORIES
# =========================================================
class ProfileRepository(ABC):
    @abstractmethod
    def get(self, user_id: str) -> schemas.ProfileRecord: ...

    @abstractmethod
    def update(self, user_id: str, data: schemas.ProfileUpdate) -> schemas.ProfileRecord: ...


class StudentRepository(ABC):
    @abstractmethod
    def list(self) -> List[schemas.StudentRow]: ...

    @abstractmethod
    def list_active(self) -> List[schemas.StudentOption]: ...

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def get(self, student_id: str) -> schemas.StudentDetail: ...

    @abstractmethod
    def update_details_and_allocate_room(self, user_id: str, data: schemas.StudentCreate) -> None:
        """Procedure `update_student_details_and_allocate_room`."""

    @abstractmethod
    def update(self, student_id: str, data: schemas.StudentUpdate) -> schemas.StudentRow: ...

    @abstractmethod
    def delete(self, student_id: str) -> None: ...


class RoomRepository(ABC):
    @abstractmethod
    def list(self) -> List[schemas.RoomRow]: ...

    @abstractmethod
    def list_available(self) -> List[schemas.RoomOption]: ...

    @abstractmethod
    def get(self, room_id: str) -> schemas.RoomRow: ...

    @abstractmethod
    def add(self, data: schemas.RoomCreate) -> None:
        """Procedure `add_room`."""

    @abstractmethod
    def update(self, room_id: str, data: schemas.RoomUpdate) -> schemas.RoomRow: ...

    @abstractmethod
    def delete(self, room_id: str) -> None: ...


class FeeRepository(ABC):
    @abstractmethod
    def list(self) -> List[schemas.FeeRow]: ...

    @abstractmethod
    def create(self, data: schemas.FeeCreate) -> schemas.FeeRow: ...

    @abstractmethod
    def record_payment(self, data: schemas.PaymentCreate) -> None:
        """Procedure `record_payment`."""

    @abstractmethod
    def total_collected(self) -> Decimal: ...


class VisitorRepository(ABC):
    @abstractmethod
    def list(self) -> List[schemas.VisitorRow]: ...

    @abstractmethod
    def log(self, data: schemas.VisitorCreate) -> None:
        """Procedure `log_visitor`."""

    @abstractmethod
    def checkout(self, visitor_id: str) -> None:
        """Procedure `checkout_visitor`."""


class ComplaintRepository(ABC):
    @abstractmethod
    def list(self) -> List[schemas.ComplaintRow]: ...

    @abstractmethod
    def list_pending(self, limit: int = 5) -> List[schemas.ComplaintRow]: ...

    @abstractmethod
    def add(self, data: schemas.ComplaintCreate) -> None:
        """Procedure `add_complaint`."""

    @abstractmethod
    def resolve(self, complaint_id: str) -> None:
        """Procedure `resolve_complaint`."""


class NoticeRepository(ABC):
    @abstractmethod
    def list(self) -> List[schemas.NoticeRow]: ...

    @abstractmethod
    def create(self, data: schemas.NoticeCreate) -> schemas.NoticeRow: ...

    @abstractmethod
    def delete(self, notice_id: str) -> None: ...


class ActivityRepository(ABC):
    @abstractmethod
    def recent(self) -> List[schemas.ActivityRow]:
        """Procedure `get_recent_activity`."""


@dataclass
class Backend:
    auth: AuthService
    profiles: ProfileRepository
    students: StudentRepository
    rooms: RoomRepository
    fees: FeeRepository
    visitors: VisitorRepository
    complaints: ComplaintRepository
    notices: NoticeRepository
    activity: ActivityRepository

    def close(self) -> None:
        closer = getattr(self.auth, "close", None)
        if callable(closer):
            closer()

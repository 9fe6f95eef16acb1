# hostel/crud/backend.py
from typing import Optional

from sqlalchemy.orm import sessionmaker  # type: ignore

from ..repositories import Backend
from .auth import SqlAuthService
from .complaints import SqlComplaintRepository
from .fees import SqlFeeRepository
from .notices import SqlNoticeRepository
from .profiles import SqlActivityRepository, SqlProfileRepository
from .rooms import SqlRoomRepository
from .students import SqlStudentRepository
from .visitors import SqlVisitorRepository


def build_sql_backend(session_factory: sessionmaker, expire_minutes: Optional[int] = None) -> Backend:
    """One backend per dashboard client: the engine is shared, the auth session is not."""
    auth = SqlAuthService(session_factory, expire_minutes=expire_minutes)
    return Backend(
        auth=auth,
        profiles=SqlProfileRepository(session_factory, auth),
        students=SqlStudentRepository(session_factory, auth),
        rooms=SqlRoomRepository(session_factory, auth),
        fees=SqlFeeRepository(session_factory, auth),
        visitors=SqlVisitorRepository(session_factory, auth),
        complaints=SqlComplaintRepository(session_factory, auth),
        notices=SqlNoticeRepository(session_factory, auth),
        activity=SqlActivityRepository(session_factory, auth),
    )

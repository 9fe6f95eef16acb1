# hostel/crud/base.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError  # type: ignore
from sqlalchemy.orm import Session, sessionmaker  # type: ignore

from ..errors import RemoteError
from ..models import Activity, Profile, utcnow
from ..repositories import AuthService

logger = logging.getLogger(__name__)


class SqlRepository:
    """
    Shared plumbing of the SQL backend: one short-lived Session per call,
    commit on success, rollback + RemoteError on failure, and the role checks
    a hosted service would do with row-level security.
    """

    def __init__(self, session_factory: sessionmaker, auth: AuthService):
        self._session_factory = session_factory
        self._auth = auth

    @contextmanager
    def _db(self) -> Iterator[Session]:
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except RemoteError:
            db.rollback()
            raise
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"[DB INTEGRITY] {e.orig}")
            raise RemoteError("The change conflicts with existing data.", code="23505", status=409)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("[DB COMMIT FAILED]")
            raise RemoteError(str(e), status=500)
        finally:
            db.close()

    # =========================================================
    # 🧩 Permission checks
    # =========================================================
    def _current_profile(self, db: Session) -> Profile:
        session = self._auth.get_session()
        if session is None:
            raise RemoteError("Not authenticated", code="401", status=401)
        profile = db.get(Profile, session.user.id)
        if profile is None:
            raise RemoteError("Profile not found for the signed-in user", code="403", status=403)
        return profile

    def _require_role(self, db: Session, *roles: str) -> Profile:
        profile = self._current_profile(db)
        if roles and profile.role not in roles:
            raise RemoteError(
                f"Permission denied: requires {' or '.join(roles)} role.",
                code="42501",
                status=403,
            )
        return profile


def log_activity(db: Session, text: str, icon: str = "default") -> Activity:
    entry = Activity(text=text[:255], icon=icon, created_at=utcnow())
    db.add(entry)
    return entry


def not_found(entity: str, entity_id: Optional[str]) -> RemoteError:
    return RemoteError(f"{entity} {entity_id} not found", code="PGRST116", status=404)

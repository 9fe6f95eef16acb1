# hostel/crud/auth.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker  # type: ignore

from .. import schemas
from ..auth_utils import create_access_token, hash_password, token_expiry, verify_password
from ..errors import RemoteError
from ..models import AuthUser, Profile, Student
from ..repositories import AuthService, SIGNED_OUT
from .base import log_activity

logger = logging.getLogger(__name__)


class SqlAuthService(AuthService):
    """
    Auth service over the `auth_users` table. Signing up also runs what the
    hosted service does in its sign-up trigger: create the profile from the
    metadata, and the student row for Student accounts.
    """

    def __init__(self, session_factory: sessionmaker, expire_minutes: Optional[int] = None):
        super().__init__()
        self._session_factory = session_factory
        self._expire_minutes = expire_minutes

    # =========================================================
    # Helpers
    # =========================================================
    @staticmethod
    def _to_user(u: AuthUser) -> schemas.AuthUser:
        meta = {}
        if u.profile is not None:
            meta = {"full_name": u.profile.full_name, "role": u.profile.role}
        return schemas.AuthUser(id=u.id, email=u.email, user_metadata=meta)

    def _issue_session(self, u: AuthUser) -> schemas.AuthSession:
        payload = {"sub": u.id, "email": u.email}
        return schemas.AuthSession(
            access_token=create_access_token(payload, expires_minutes=self._expire_minutes),
            refresh_token=None,
            expires_at=token_expiry(self._expire_minutes),
            user=self._to_user(u),
        )

    def _current_role(self, db: Session) -> Optional[str]:
        session = self.get_session()
        if session is None:
            return None
        profile = db.get(Profile, session.user.id)
        return profile.role if profile else None

    # =========================================================
    # 🧩 Operations
    # =========================================================
    def register(self, data: schemas.SignUpIn) -> schemas.AuthResponse:
        email = str(data.email).strip().lower()
        db: Session = self._session_factory()
        try:
            if db.query(AuthUser).filter(AuthUser.email == email).first():
                raise RemoteError("User already registered", code="user_already_exists", status=422)

            u = AuthUser(email=email, hashed_password=hash_password(data.password))
            db.add(u)
            db.flush()

            profile = Profile(id=u.id, full_name=data.full_name, role=data.role)
            db.add(profile)
            if data.role == "Student":
                db.add(Student(user_id=u.id, name=data.full_name, email=email, status="Active"))
                log_activity(db, f"New student {data.full_name} registered", "user-plus")
            db.commit()
            db.refresh(u)
            logger.info(f"[auth] registered {email} as {data.role}")
            return schemas.AuthResponse(user=self._to_user(u), session=self._issue_session(u))
        except RemoteError:
            db.rollback()
            raise
        finally:
            db.close()

    def sign_in(self, data: schemas.SignInIn) -> schemas.AuthResponse:
        email = str(data.email).strip().lower()
        db: Session = self._session_factory()
        try:
            u = db.query(AuthUser).filter(AuthUser.email == email).first()
            if not u or not verify_password(data.password, u.hashed_password):
                raise RemoteError("Invalid login credentials", code="invalid_credentials", status=400)
            session = self._issue_session(u)
            user = session.user
        finally:
            db.close()
        self._adopt(session)
        return schemas.AuthResponse(user=user, session=session)

    def sign_out(self) -> None:
        self._session = None
        self._emit(SIGNED_OUT, None)

    def delete_user(self, user_id: str) -> None:
        db: Session = self._session_factory()
        try:
            if self._current_role(db) != "Admin":
                raise RemoteError("User not allowed", code="not_admin", status=403)
            u = db.get(AuthUser, user_id)
            if u is None:
                raise RemoteError("User not found", code="user_not_found", status=404)
            db.delete(u)
            db.commit()
            logger.info(f"[auth] deleted user {user_id}")
        except RemoteError:
            db.rollback()
            raise
        finally:
            db.close()

# hostel/remote/auth.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from .. import schemas
from ..errors import RemoteError
from ..repositories import AuthService, SIGNED_OUT
from .client import RemoteClient

logger = logging.getLogger(__name__)


def _utc_naive(ts: datetime) -> datetime:
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def session_from_body(body: Dict[str, Any]) -> Optional[schemas.AuthSession]:
    """Token responses carry access_token + expires_at (epoch seconds) or expires_in."""
    if not body.get("access_token") or not body.get("user"):
        return None
    if body.get("expires_at"):
        expires_at = _utc_naive(datetime.fromtimestamp(int(body["expires_at"]), timezone.utc))
    else:
        expires_in = int(body.get("expires_in") or 3600)
        expires_at = _utc_naive(datetime.now(timezone.utc) + timedelta(seconds=expires_in))
    return schemas.AuthSession(
        access_token=body["access_token"],
        refresh_token=body.get("refresh_token"),
        expires_at=expires_at,
        user=schemas.AuthUser.model_validate(body["user"]),
    )


class RemoteAuthService(AuthService):

    def __init__(self, client: RemoteClient):
        super().__init__()
        self._client = client

    def _adopt(self, session: Optional[schemas.AuthSession]) -> None:
        self._client.access_token = session.access_token if session else None
        super()._adopt(session)

    def get_session(self) -> Optional[schemas.AuthSession]:
        session = super().get_session()
        if session is None:
            self._client.access_token = None
        return session

    def register(self, data: schemas.SignUpIn) -> schemas.AuthResponse:
        resp = self._client.request(
            "POST",
            "/auth/v1/signup",
            json={
                "email": str(data.email),
                "password": data.password,
                "data": {"full_name": data.full_name, "role": data.role},
            },
            bearer=self._client.anon_key,
        )
        body = resp.json() if resp.content else {}
        session = session_from_body(body)
        if session is not None:
            return schemas.AuthResponse(user=session.user, session=session)
        # email confirmation pending: the body is the user itself (or nothing usable)
        user_body = body.get("user") or (body if body.get("id") else None)
        user = schemas.AuthUser.model_validate(user_body) if user_body else None
        return schemas.AuthResponse(user=user, session=None)

    def sign_in(self, data: schemas.SignInIn) -> schemas.AuthResponse:
        resp = self._client.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": str(data.email), "password": data.password},
            bearer=self._client.anon_key,
        )
        session = session_from_body(resp.json())
        if session is None:
            raise RemoteError("Sign-in response did not contain a session", status=resp.status_code)
        self._adopt(session)
        return schemas.AuthResponse(user=session.user, session=session)

    def sign_out(self) -> None:
        token = self._session.access_token if self._session else None
        try:
            if token:
                self._client.request("POST", "/auth/v1/logout", bearer=token)
        finally:
            # the local session is gone even when the server call fails
            self._session = None
            self._client.access_token = None
            self._emit(SIGNED_OUT, None)

    def delete_user(self, user_id: str) -> None:
        if not self._client.service_key:
            raise RemoteError("Deleting users requires REMOTE_SERVICE_KEY", code="not_admin", status=403)
        self._client.request(
            "DELETE",
            f"/auth/v1/admin/users/{user_id}",
            bearer=self._client.service_key,
        )
        logger.info(f"[auth] deleted user {user_id}")

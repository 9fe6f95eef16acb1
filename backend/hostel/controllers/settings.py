# hostel/controllers/settings.py
from __future__ import annotations

from typing import Optional

from .. import schemas
from ..errors import RemoteError, Result
from ..repositories import Backend
from ..session_store import AuthContext
from ..toasts import ToastQueue


class SettingsController:
    def __init__(self, backend: Backend, toasts: ToastQueue, auth: AuthContext):
        self.backend = backend
        self.toasts = toasts
        self.auth = auth

    def current(self) -> dict:
        profile = self.auth.profile
        user = self.auth.user
        return {
            "email": user.email if user else None,
            "full_name": profile.full_name if profile else None,
            "role": profile.role if profile else None,
        }

    def update_profile(self, full_name: str) -> Result[Optional[schemas.Profile]]:
        user = self.auth.user
        if user is None:
            err = RemoteError("Not authenticated", code="401", status=401)
            self.toasts.error(err.message)
            return Result.failure(err)
        try:
            self.backend.profiles.update(user.id, schemas.ProfileUpdate(full_name=full_name))
        except RemoteError as e:
            self.toasts.error(e.message)
            return Result.failure(e)
        self.toasts.success("Profile updated successfully!")
        return Result.success(self.auth.refresh_profile())

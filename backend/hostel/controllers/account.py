# hostel/controllers/account.py
from __future__ import annotations

from .. import schemas
from ..errors import Result
from ..session_store import AuthContext
from ..toasts import ToastQueue

SIGNUP_TOAST_MS = 10000


class AccountController:
    """Login, signup and logout screens: the identity store plus a toast for each outcome."""

    def __init__(self, toasts: ToastQueue, auth: AuthContext):
        self.toasts = toasts
        self.auth = auth

    def sign_in(self, data: schemas.SignInIn) -> Result[schemas.AuthResponse]:
        res = self.auth.sign_in(data)
        if res.error is not None:
            self.toasts.error(res.error.message)
        else:
            self.toasts.success("Signed in successfully!")
        return res

    def sign_up(self, data: schemas.SignUpIn) -> Result[schemas.AuthResponse]:
        # self-service accounts are always students
        res = self.auth.sign_up(data.model_copy(update={"role": "Student"}))
        if res.error is not None:
            self.toasts.error(res.error.message)
        else:
            self.toasts.success("Account created! Please check your email to verify.", duration_ms=SIGNUP_TOAST_MS)
        return res

    def sign_out(self) -> Result[None]:
        res = self.auth.sign_out()
        if res.error is not None:
            self.toasts.error(res.error.message)
        else:
            self.toasts.success("Signed out successfully")
        return res

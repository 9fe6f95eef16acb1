# hostel/guard.py
from __future__ import annotations

import re
from typing import Optional, Tuple

from .schemas import AuthSession

LOGIN = "/login"
ROOT = "/"

AUTH_ROUTES = (LOGIN, "/signup")

PUBLIC_PATHS = ("/healthz", "/docs", "/redoc", "/openapi.json")

# Everything below needs a session. "{id}" segments match any single path part.
PROTECTED_ROUTES: Tuple[str, ...] = (
    "/",
    "/navigation",
    "/toasts",
    "/toasts/{id}",
    "/logout",
    "/students",
    "/students/filter",
    "/students/form/rooms",
    "/students/{id}",
    "/rooms",
    "/rooms/filter",
    "/rooms/{id}",
    "/fees",
    "/fees/filter",
    "/fees/{id}/payments",
    "/visitors",
    "/visitors/filter",
    "/visitors/form/students",
    "/visitors/{id}/checkout",
    "/complaints",
    "/complaints/filter",
    "/complaints/{id}/resolve",
    "/announcements",
    "/announcements/{id}",
    "/settings",
    "/settings/profile",
)


def _compile(route: str) -> "re.Pattern[str]":
    return re.compile("^" + re.sub(r"\\\{id\\\}", "[^/]+", re.escape(route)) + "$")


_PROTECTED = [_compile(r) for r in PROTECTED_ROUTES]


def normalize(path: str) -> str:
    path = path.split("?", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or ROOT


def is_public(path: str) -> bool:
    path = normalize(path)
    return any(path == p or path.startswith(p + "/") for p in PUBLIC_PATHS)


def is_protected(path: str) -> bool:
    path = normalize(path)
    return any(p.match(path) for p in _PROTECTED)


def is_authenticated(session: Optional[AuthSession]) -> bool:
    return session is not None and not session.is_expired()


def resolve(path: str, session: Optional[AuthSession]) -> Optional[str]:
    """
    Where a request for `path` should be sent instead, or None to let it through.

    Unauthenticated: protected routes -> /login.
    Authenticated: /login and /signup -> /.
    Unknown routes go to / or /login depending on the state.
    """
    path = normalize(path)
    if is_public(path):
        return None
    authed = is_authenticated(session)
    if path in AUTH_ROUTES:
        return ROOT if authed else None
    if is_protected(path):
        return None if authed else LOGIN
    return ROOT if authed else LOGIN

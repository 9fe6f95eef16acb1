from datetime import datetime, timedelta, timezone

import pytest  # type: ignore

from hostel import guard, schemas


def make_session(minutes: int = 30) -> schemas.AuthSession:
    return schemas.AuthSession(
        access_token="tok",
        expires_at=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(minutes=minutes),
        user=schemas.AuthUser(id="u1", email="a@hostel.ac.uk"),
    )


@pytest.mark.parametrize("path", [
    "/", "/students", "/students/abc-123", "/rooms", "/rooms/r1", "/fees",
    "/visitors", "/complaints", "/announcements", "/settings", "/navigation", "/toasts",
])
def test_protected_paths_redirect_to_login_without_session(path):
    assert guard.resolve(path, None) == "/login"


@pytest.mark.parametrize("path", ["/", "/students/abc-123", "/fees/f1/payments", "/settings/profile"])
def test_protected_paths_pass_with_session(path):
    assert guard.resolve(path, make_session()) is None


@pytest.mark.parametrize("path", ["/login", "/signup", "/login/"])
def test_auth_views_redirect_home_with_session(path):
    assert guard.resolve(path, make_session()) == "/"


def test_auth_views_are_open_without_session():
    assert guard.resolve("/login", None) is None
    assert guard.resolve("/signup", None) is None


def test_expired_session_counts_as_unauthenticated():
    expired = make_session(minutes=-1)
    assert guard.resolve("/students", expired) == "/login"
    assert guard.resolve("/login", expired) is None


def test_unknown_paths_depend_on_state():
    assert guard.resolve("/nowhere", None) == "/login"
    assert guard.resolve("/nowhere", make_session()) == "/"


def test_public_paths_bypass():
    for path in ("/healthz", "/docs", "/openapi.json", "/docs/oauth2-redirect"):
        assert guard.resolve(path, None) is None

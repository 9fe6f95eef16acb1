# tests/conftest.py
from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest  # type: ignore

from hostel import schemas
from hostel.crud.auth import SqlAuthService
from hostel.crud.backend import build_sql_backend
from hostel.database import init_db, make_engine, make_session_factory
from hostel.remote.backend import build_remote_backend
from hostel.session_store import AuthContext
from hostel.toasts import ToastQueue

PASSWORD = "s3cret-pass"


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


def register(session_factory, email: str, full_name: str, role: str = "Student") -> schemas.AuthUser:
    res = SqlAuthService(session_factory).register(
        schemas.SignUpIn(email=email, password=PASSWORD, full_name=full_name, role=role)
    )
    return res.user


def signed_in(session_factory, email: str):
    backend = build_sql_backend(session_factory)
    backend.auth.sign_in(schemas.SignInIn(email=email, password=PASSWORD))
    return backend


@pytest.fixture
def admin_user(session_factory):
    return register(session_factory, "admin@hostel.ac.uk", "Alice Admin", "Admin")


@pytest.fixture
def warden_user(session_factory):
    return register(session_factory, "warden@hostel.ac.uk", "Walter Warden", "Warden")


@pytest.fixture
def student_user(session_factory):
    return register(session_factory, "sam@hostel.ac.uk", "Sam Student", "Student")


@pytest.fixture
def admin(session_factory, admin_user):
    return signed_in(session_factory, "admin@hostel.ac.uk")


@pytest.fixture
def warden(session_factory, warden_user):
    return signed_in(session_factory, "warden@hostel.ac.uk")


@pytest.fixture
def student(session_factory, student_user):
    return signed_in(session_factory, "sam@hostel.ac.uk")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def toasts(clock):
    return ToastQueue(default_duration_ms=5000, clock=clock)


def context_for(backend) -> AuthContext:
    return AuthContext(backend.auth, backend.profiles).initialize()


def add_room(backend, room_no: str, block: str = "A", type: str = "Single", capacity: int = 1) -> schemas.RoomRow:
    backend.rooms.add(schemas.RoomCreate(room_no=room_no, block=block, type=type, capacity=capacity))
    return next(r for r in backend.rooms.list() if r.room_no == room_no and r.block == block)


def student_row(backend, name: str) -> schemas.StudentRow:
    return next(s for s in backend.students.list() if s.name == name)


def new_fee(backend, student_id: str, amount: str = "500.00") -> schemas.FeeRow:
    return backend.fees.create(schemas.FeeCreate(
        student_id=student_id,
        total_amount=Decimal(amount),
        due_date=date(2026, 9, 30),
    ))


# ==========================
# Fake HTTP session for the remote backend
# ==========================
class FakeResponse:
    def __init__(self, status_code=200, body=None, headers=None):
        self.status_code = status_code
        self._body = body
        self.headers = headers or {}
        self.content = b"" if body is None else json.dumps(body).encode()
        self.text = self.content.decode()

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


class FakeHttp:
    """Stands in for requests.Session: routes by (method, path) and records every call."""

    def __init__(self, base_url: str = "https://hostel.example.co"):
        self.base_url = base_url
        self.routes = {}
        self.calls = []

    def on(self, method: str, path: str, handler):
        self.routes[(method, path)] = handler if callable(handler) else (lambda call, r=handler: r)
        return self

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        call = {"method": method, "path": path, "params": params or [], "json": json, "headers": headers or {}}
        self.calls.append(call)
        handler = self.routes.get((method, path))
        if handler is None:
            return FakeResponse(404, {"message": f"no route {method} {path}"})
        return handler(call)

    def calls_to(self, method: str, path: str):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


def token_body(user_id: str, email: str = "user@hostel.ac.uk") -> dict:
    return {
        "access_token": f"jwt-{user_id}",
        "refresh_token": "refresh",
        "expires_in": 3600,
        "user": {"id": user_id, "email": email, "user_metadata": {}},
    }


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def remote(http):
    return build_remote_backend(http.base_url, "anon-key", service_key="service-key", http=http)

from datetime import timedelta

from hostel import schemas
from hostel.crud.backend import build_sql_backend
from hostel.errors import RemoteError
from hostel.repositories import SIGNED_OUT
from hostel.session_store import AuthContext

from conftest import PASSWORD, context_for


class BrokenProfiles:
    def get(self, user_id):
        raise RemoteError("profiles table unavailable")

    def update(self, user_id, data):
        raise RemoteError("profiles table unavailable")


def test_initialize_without_session(session_factory):
    backend = build_sql_backend(session_factory)
    ctx = context_for(backend)
    assert ctx.loading is False
    assert ctx.session is None
    assert ctx.user is None
    assert ctx.profile is None


def test_sign_in_resolves_typed_profile(session_factory, admin_user):
    backend = build_sql_backend(session_factory)
    ctx = context_for(backend)

    res = ctx.sign_in(schemas.SignInIn(email="admin@hostel.ac.uk", password=PASSWORD))
    assert res.ok
    assert isinstance(ctx.profile, schemas.AdminProfile)
    assert ctx.is_admin() and not ctx.is_student()
    assert ctx.user.id == admin_user.id


def test_student_profile_carries_student_id(student):
    ctx = context_for(student)
    assert isinstance(ctx.profile, schemas.StudentProfile)
    assert ctx.profile.student_id
    assert ctx.role == "Student"


def test_resolve_profile_unknown_role_is_student():
    rec = schemas.ProfileRecord(id="p1", full_name="X", role="Janitor")
    assert isinstance(schemas.resolve_profile(rec), schemas.StudentProfile)


def test_failed_sign_in_returns_error_result(session_factory, admin_user):
    ctx = context_for(build_sql_backend(session_factory))
    res = ctx.sign_in(schemas.SignInIn(email="admin@hostel.ac.uk", password="nope"))
    assert not res.ok
    assert res.error.message == "Invalid login credentials"
    assert ctx.session is None


def test_listeners_follow_sign_out_and_unsubscribe(admin):
    ctx = context_for(admin)
    seen = []
    unsubscribe = ctx.subscribe(lambda store: seen.append(store.profile))

    assert ctx.sign_out().ok
    assert ctx.profile is None and ctx.session is None
    assert seen == [None]

    unsubscribe()
    admin.auth.sign_in(schemas.SignInIn(email="admin@hostel.ac.uk", password=PASSWORD))
    assert len(seen) == 1
    assert ctx.is_admin()


def test_initialization_error_is_swallowed(admin):
    ctx = AuthContext(admin.auth, BrokenProfiles()).initialize()
    assert ctx.loading is False
    assert ctx.profile is None
    # a session without a profile is still a session
    assert ctx.session is not None


def test_expired_session_reports_signed_out(admin):
    events = []
    admin.auth.on_auth_state_change(lambda event, session: events.append(event))
    ctx = context_for(admin)

    session = admin.auth.get_session()
    expired = session.model_copy(update={"expires_at": session.expires_at - timedelta(days=2)})
    admin.auth._session = expired
    ctx._session = expired

    assert ctx.session is None
    assert ctx.profile is None
    assert SIGNED_OUT in events


def test_sign_up_forces_session_for_new_student(session_factory):
    ctx = context_for(build_sql_backend(session_factory))
    res = ctx.sign_up(schemas.SignUpIn(email="new@hostel.ac.uk", password=PASSWORD, full_name="Nina New"))
    assert res.ok
    assert isinstance(ctx.profile, schemas.StudentProfile)
    assert ctx.profile.full_name == "Nina New"


def test_refresh_profile(student, student_user):
    ctx = context_for(student)
    student.profiles.update(student_user.id, schemas.ProfileUpdate(full_name="Sammy"))
    assert ctx.profile.full_name == "Sam Student"
    assert ctx.refresh_profile().full_name == "Sammy"

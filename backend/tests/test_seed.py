import pytest  # type: ignore

from hostel import schemas, seed
from hostel.crud.backend import build_sql_backend
from hostel.database import make_engine, make_session_factory
from hostel.errors import RemoteError
from hostel.seed import create_account


def test_create_admin_account(tmp_path):
    url = f"sqlite:///{tmp_path / 'hostel.db'}"
    user = create_account(url, "boss@hostel.ac.uk", "Bea Boss", "pw-123456", "Admin")
    assert user.user_metadata == {"full_name": "Bea Boss", "role": "Admin"}

    engine = make_engine(url)
    backend = build_sql_backend(make_session_factory(engine))
    backend.auth.sign_in(schemas.SignInIn(email="boss@hostel.ac.uk", password="pw-123456"))
    assert backend.profiles.get(user.id).role == "Admin"
    engine.dispose()

    with pytest.raises(RemoteError, match="already registered"):
        create_account(url, "boss@hostel.ac.uk", "Bea Again", "pw", "Admin")


def test_engine_released_when_registration_fails(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'hostel.db'}"
    create_account(url, "boss@hostel.ac.uk", "Bea Boss", "pw-123456", "Admin")

    disposed = []
    real_make_engine = seed.make_engine

    def tracking_engine(database_url):
        engine = real_make_engine(database_url)
        monkeypatch.setattr(engine, "dispose", lambda *args, **kwargs: disposed.append(database_url))
        return engine

    monkeypatch.setattr(seed, "make_engine", tracking_engine)
    with pytest.raises(RemoteError):
        create_account(url, "boss@hostel.ac.uk", "Bea Again", "pw", "Admin")
    assert disposed == [url]

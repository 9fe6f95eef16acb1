# hostel/seed.py
"""
Create staff accounts for the SQL backend. Self-service signup only ever
creates students, so the first Admin has to come from here:

    python -m hostel.seed admin@hostel.ac.uk "Alice Admin" --password ... --role Admin
"""
import argparse
import logging

from . import schemas
from .config import settings
from .crud.auth import SqlAuthService
from .database import init_db, make_engine, make_session_factory
from .errors import RemoteError

logger = logging.getLogger(__name__)


def create_account(database_url: str, email: str, full_name: str, password: str, role: str) -> schemas.AuthUser:
    engine = make_engine(database_url)
    try:
        init_db(engine)
        auth = SqlAuthService(make_session_factory(engine))
        res = auth.register(schemas.SignUpIn(email=email, password=password, full_name=full_name, role=role))
    finally:
        engine.dispose()
    return res.user


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("email", type=str, help="Login email")
    parser.add_argument("full_name", type=str, help="Display name")
    parser.add_argument("--password", type=str, required=True)
    parser.add_argument("--role", choices=["Admin", "Warden", "Student"], default="Admin")
    parser.add_argument("--database-url", type=str, default=settings.DATABASE_URL)
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL)
    try:
        user = create_account(args.database_url, args.email, args.full_name, args.password, args.role)
    except RemoteError as e:
        parser.exit(1, f"❌ {e.message}\n")
    print(f"✅ {args.role} {user.email} created ({user.id})")


if __name__ == "__main__":
    main()

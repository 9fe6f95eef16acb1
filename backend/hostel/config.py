import os
from typing import Optional

from dotenv import load_dotenv # type: ignore

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Hostel Management System")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "PLEASE_CHANGE_ME")  # change before deploying
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "hms_session")

    # "sql" talks to DATABASE_URL directly, "remote" to the hosted REST/auth service
    BACKEND: str = os.getenv("BACKEND", "sql").strip().lower()
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./hostel.db")

    REMOTE_URL: str = os.getenv("REMOTE_URL", "").rstrip("/")
    REMOTE_ANON_KEY: str = os.getenv("REMOTE_ANON_KEY", "")
    REMOTE_SERVICE_KEY: str = os.getenv("REMOTE_SERVICE_KEY", "")
    REMOTE_TIMEOUT: Optional[float] = _optional_float("REMOTE_TIMEOUT")

    TOAST_DURATION_MS: int = int(os.getenv("TOAST_DURATION_MS", "5000"))
    CLIENT_IDLE_MINUTES: int = int(os.getenv("CLIENT_IDLE_MINUTES", "120"))
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://127.0.0.1:5173,http://localhost:5173").split(",") if o.strip()]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()

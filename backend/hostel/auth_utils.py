# hostel/auth_utils.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import JWTError, jwt  # type: ignore
from passlib.context import CryptContext  # type: ignore

from .config import settings

# ===================== Password hashing =====================
pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(plain_password: str) -> str:
    return pwd_ctx.hash(plain_password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_ctx.verify(plain_password, hashed_password)

# ===================== JWT config =====================
ALGORITHM = "HS256"

def create_access_token(
    data: Dict[str, Any],
    expires_minutes: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Sign a JWT; the payload should carry 'sub' (user id or client id)."""
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key or settings.SECRET_KEY, algorithm=ALGORITHM)

def decode_token(token: str, secret_key: Optional[str] = None) -> Optional[dict]:
    try:
        return jwt.decode(token, secret_key or settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

def token_expiry(minutes: Optional[int] = None) -> datetime:
    """Naive UTC expiry matching `create_access_token`."""
    minutes = minutes if minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return (datetime.now(timezone.utc) + timedelta(minutes=minutes)).replace(tzinfo=None)

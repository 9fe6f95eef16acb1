# hostel/deps.py
from typing import Optional, TypeVar

from fastapi import HTTPException, Request, status  # type: ignore

from .clients import ClientRegistry, ClientState
from .errors import Result

T = TypeVar("T")


# =========================================================
# 🔑 Client state attached by the guard middleware
# =========================================================
def get_registry(request: Request) -> ClientRegistry:
    return request.app.state.registry


def get_client(request: Request) -> ClientState:
    client: Optional[ClientState] = getattr(request.state, "client", None)
    if client is None:
        # the guard registers states only for sign-in/sign-up
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return client


# =========================================================
# 🧩 Result -> HTTP
# =========================================================
def unwrap(result: Result[T], status_code: int = status.HTTP_400_BAD_REQUEST) -> Optional[T]:
    """A failed call becomes an HTTP error whose detail is the backend's message."""
    if result.error is not None:
        raise HTTPException(status_code=status_code, detail=result.error.message)
    return result.data

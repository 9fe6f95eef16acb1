# hostel/routers/account_router.py
from fastapi import APIRouter, Depends, Request, Response  # type: ignore

from ..clients import ClientState
from ..deps import get_client, get_registry, unwrap
from ..navigation import navigation_payload
from ..schemas import SignInIn, SignUpIn

router = APIRouter(tags=["Account"])


def _me(client: ClientState) -> dict:
    profile = client.auth.profile
    return {
        "user": client.auth.user.model_dump() if client.auth.user else None,
        "profile": profile.model_dump() if profile else None,
    }


@router.get("/login")
def login_page():
    return {"page": "login"}


@router.get("/signup")
def signup_page():
    return {"page": "signup", "role": "Student"}


@router.post("/login")
def login(data: SignInIn, client: ClientState = Depends(get_client)):
    unwrap(client.account.sign_in(data))
    return _me(client)


@router.post("/signup")
def signup(data: SignUpIn, client: ClientState = Depends(get_client)):
    unwrap(client.account.sign_up(data))
    return _me(client)


@router.post("/logout")
def logout(request: Request, response: Response, client: ClientState = Depends(get_client)):
    result = client.account.sign_out()
    get_registry(request).drop(client.client_id)
    response.delete_cookie(request.app.state.settings.SESSION_COOKIE_NAME)
    unwrap(result)
    return {"ok": True}


# =========================================================
# Shell: sidebar + toasts
# =========================================================
@router.get("/navigation")
def navigation(client: ClientState = Depends(get_client)):
    return navigation_payload(client.auth.role)


@router.get("/toasts")
def list_toasts(client: ClientState = Depends(get_client)):
    return [t.to_dict() for t in client.toasts.active()]


@router.delete("/toasts/{toast_id}")
def dismiss_toast(toast_id: int, client: ClientState = Depends(get_client)):
    return {"dismissed": client.toasts.dismiss(toast_id)}

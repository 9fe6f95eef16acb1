# hostel/routers/settings_router.py
from fastapi import APIRouter, Depends  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import ProfileUpdate

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("")
def settings_page(client: ClientState = Depends(get_client)):
    return client.settings.current()


@router.patch("/profile")
def update_profile(data: ProfileUpdate, client: ClientState = Depends(get_client)):
    unwrap(client.settings.update_profile(data.full_name))
    return client.settings.current()

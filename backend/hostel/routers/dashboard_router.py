# hostel/routers/dashboard_router.py
from fastapi import APIRouter, Depends  # type: ignore

from ..clients import ClientState
from ..deps import get_client
from ..schemas import DashboardData

router = APIRouter(tags=["Dashboard"])


@router.get("/", response_model=DashboardData)
def dashboard(client: ClientState = Depends(get_client)):
    return client.dashboard.load()

# hostel/routers/announcements_router.py
from typing import List

from fastapi import APIRouter, Depends, status  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import NoticeIn, NoticeRow

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.get("")
def mount(client: ClientState = Depends(get_client)):
    client.announcements.fetch()
    return {
        "rows": [r.model_dump(mode="json") for r in client.announcements.rows],
        "can_manage": client.announcements.can_manage,
    }


@router.post("", response_model=List[NoticeRow], status_code=status.HTTP_201_CREATED)
def post_announcement(data: NoticeIn, client: ClientState = Depends(get_client)):
    unwrap(client.announcements.create(data))
    return client.announcements.rows


@router.delete("/{notice_id}", response_model=List[NoticeRow])
def delete_announcement(notice_id: str, client: ClientState = Depends(get_client)):
    unwrap(client.announcements.delete(notice_id))
    return client.announcements.rows

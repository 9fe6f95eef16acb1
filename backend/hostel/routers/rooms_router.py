# hostel/routers/rooms_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import RoomCreate, RoomRow, RoomUpdate

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomRow])
def mount(client: ClientState = Depends(get_client)):
    client.rooms.fetch()
    return client.rooms.rows


@router.get("/filter", response_model=List[RoomRow])
def filter_rooms(
    term: Optional[str] = None,
    status: Optional[str] = None,
    type: Optional[str] = None,
    client: ClientState = Depends(get_client),
):
    return client.rooms.filter(term=term, status=status, type=type)


@router.post("", response_model=List[RoomRow], status_code=status.HTTP_201_CREATED)
def create_room(data: RoomCreate, client: ClientState = Depends(get_client)):
    unwrap(client.rooms.create(data))
    return client.rooms.rows


@router.patch("/{room_id}", response_model=List[RoomRow])
def update_room(room_id: str, data: RoomUpdate, client: ClientState = Depends(get_client)):
    unwrap(client.rooms.update(room_id, data))
    return client.rooms.rows


@router.delete("/{room_id}", response_model=List[RoomRow])
def delete_room(room_id: str, client: ClientState = Depends(get_client)):
    unwrap(client.rooms.delete(room_id))
    return client.rooms.rows


@router.get("/{room_id}", response_model=RoomRow)
def room_detail(room_id: str, client: ClientState = Depends(get_client)):
    res = client.rooms.detail(room_id)
    if res.error is not None:
        raise HTTPException(status_code=404, detail="Room not found.")
    return res.data

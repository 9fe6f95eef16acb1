# hostel/controllers/rooms.py
from __future__ import annotations

from typing import List, Optional

from .. import filters, schemas
from ..errors import Result
from .base import PageController


class RoomsController(PageController[schemas.RoomRow]):
    entity = "rooms"

    def _load(self) -> List[schemas.RoomRow]:
        return self.backend.rooms.list()

    def filter(
        self,
        term: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
    ) -> List[schemas.RoomRow]:
        return filters.apply(
            self.rows,
            filters.by_term(term, lambda r: (r.room_no,)),
            filters.by_exact(status, lambda r: r.status),
            filters.by_exact(type, lambda r: r.type),
        )

    def create(self, data: schemas.RoomCreate) -> Result[None]:
        return self._mutate(lambda: self.backend.rooms.add(data), "Room added successfully!")

    def update(self, room_id: str, data: schemas.RoomUpdate) -> Result[schemas.RoomRow]:
        return self._mutate(lambda: self.backend.rooms.update(room_id, data), "Room updated successfully!")

    def delete(self, room_id: str) -> Result[None]:
        return self._mutate(lambda: self.backend.rooms.delete(room_id), "Room deleted successfully!")

    def detail(self, room_id: str) -> Result[schemas.RoomRow]:
        return self._detail(lambda: self.backend.rooms.get(room_id))

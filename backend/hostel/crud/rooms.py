# hostel/crud/rooms.py
from __future__ import annotations

from typing import List

from sqlalchemy.orm import selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Room, Student
from ..repositories import RoomRepository
from .base import SqlRepository, not_found
from .students import STAFF, occupants_of, refresh_room_status


class SqlRoomRepository(SqlRepository, RoomRepository):

    def list(self) -> List[schemas.RoomRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Room)
                .options(selectinload(Room.students))
                .order_by(Room.block.asc(), Room.room_no.asc())
                .all()
            )
            return [schemas.RoomRow.model_validate(r) for r in rows]

    def list_available(self) -> List[schemas.RoomOption]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Room)
                .filter(Room.status == "Available")
                .order_by(Room.block.asc(), Room.room_no.asc())
                .all()
            )
            return [schemas.RoomOption.model_validate(r) for r in rows]

    def get(self, room_id: str) -> schemas.RoomRow:
        with self._db() as db:
            self._current_profile(db)
            room = (
                db.query(Room)
                .options(selectinload(Room.students))
                .filter(Room.id == room_id)
                .first()
            )
            if not room:
                raise not_found("Room", room_id)
            return schemas.RoomRow.model_validate(room)

    # =========================================================
    # 🧩 Procedure: add_room
    # =========================================================
    def add(self, data: schemas.RoomCreate) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)
            room_no = data.room_no.strip()
            exists = (
                db.query(Room)
                .filter(Room.block == data.block, Room.room_no == room_no)
                .first()
            )
            if exists:
                raise RemoteError(
                    f"Room {room_no} already exists in block {data.block}",
                    code="23505",
                    status=409,
                )
            db.add(Room(
                room_no=room_no,
                block=data.block,
                type=data.type,
                capacity=data.capacity,
                status="Available",
            ))

    # =========================================================
    # ✏️ Direct table writes
    # =========================================================
    def update(self, room_id: str, data: schemas.RoomUpdate) -> schemas.RoomRow:
        with self._db() as db:
            self._require_role(db, *STAFF)
            room = db.query(Room).options(selectinload(Room.students)).filter(Room.id == room_id).first()
            if not room:
                raise not_found("Room", room_id)

            changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
            if "capacity" in changes and changes["capacity"] < occupants_of(db, room.id):
                raise RemoteError(
                    f"Room {room.room_no} has more occupants than the new capacity",
                    code="P0001",
                    status=400,
                )
            new_status = changes.pop("status", None)
            for field, val in changes.items():
                setattr(room, field, val)

            # Only Maintenance can be set by hand; Available/Occupied follow occupancy.
            if new_status == "Maintenance":
                room.status = "Maintenance"
            elif new_status is not None or room.status != "Maintenance":
                room.status = "Available"
                refresh_room_status(db, room)

            db.flush()
            return schemas.RoomRow.model_validate(room)

    def delete(self, room_id: str) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)
            room = db.get(Room, room_id)
            if not room:
                raise not_found("Room", room_id)
            if db.query(Student.id).filter(Student.room_id == room_id).first():
                raise RemoteError(
                    f"Room {room.room_no} still has occupants",
                    code="23503",
                    status=409,
                )
            db.delete(room)

# hostel/crud/students.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func  # type: ignore
from sqlalchemy.orm import Session, selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Fee, Room, Student
from ..repositories import StudentRepository
from .base import SqlRepository, log_activity, not_found

logger = logging.getLogger(__name__)

STAFF = ("Admin", "Warden")


# --------- Helpers ----------
def occupants_of(db: Session, room_id: str) -> int:
    return db.query(func.count(Student.id)).filter(Student.room_id == room_id).scalar() or 0


def refresh_room_status(db: Session, room: Optional[Room]) -> None:
    """
    Room.status is the stored source of truth; it is only ever changed here,
    on the server side, after an allocation changes. Maintenance is left alone.
    """
    if room is None or room.status == "Maintenance":
        return
    db.flush()
    taken = occupants_of(db, room.id)
    room.status = "Occupied" if taken >= room.capacity else "Available"


class SqlStudentRepository(SqlRepository, StudentRepository):

    def list(self) -> List[schemas.StudentRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Student)
                .options(selectinload(Student.room))
                .order_by(Student.name.asc())
                .all()
            )
            return [schemas.StudentRow.model_validate(r) for r in rows]

    def list_active(self) -> List[schemas.StudentOption]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Student)
                .filter(Student.status == "Active")
                .order_by(Student.name.asc())
                .all()
            )
            return [schemas.StudentOption.model_validate(r) for r in rows]

    def count(self) -> int:
        with self._db() as db:
            self._current_profile(db)
            return db.query(func.count(Student.id)).scalar() or 0

    def get(self, student_id: str) -> schemas.StudentDetail:
        with self._db() as db:
            self._current_profile(db)
            st = (
                db.query(Student)
                .options(
                    selectinload(Student.room),
                    selectinload(Student.fees).selectinload(Fee.payments),
                )
                .filter(Student.id == student_id)
                .first()
            )
            if not st:
                raise not_found("Student", student_id)
            return schemas.StudentDetail.model_validate(st)

    # =========================================================
    # 🧩 Procedure: update_student_details_and_allocate_room
    # =========================================================
    def update_details_and_allocate_room(self, user_id: str, data: schemas.StudentCreate) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)

            st = db.query(Student).filter(Student.user_id == user_id).first()
            if not st:
                raise RemoteError(f"No student record for user {user_id}", code="P0002", status=404)

            st.course = data.course
            st.contact = data.contact
            st.joining_date = data.joining_date
            st.status = data.status

            previous = st.room
            if data.room_id:
                room = db.get(Room, data.room_id)
                if room is None:
                    raise not_found("Room", data.room_id)
                if room.status == "Maintenance":
                    raise RemoteError(f"Room {room.room_no} is under maintenance", code="P0001", status=400)
                if room.id != st.room_id and occupants_of(db, room.id) >= room.capacity:
                    raise RemoteError(f"Room {room.room_no} is full", code="P0001", status=400)
                st.room = room
            else:
                st.room = None

            refresh_room_status(db, st.room)
            if previous is not None and previous is not st.room:
                refresh_room_status(db, previous)

            log_activity(db, f"{st.name} joined {data.course}", "user-plus")

    # =========================================================
    # ✏️ Direct table writes
    # =========================================================
    def update(self, student_id: str, data: schemas.StudentUpdate) -> schemas.StudentRow:
        with self._db() as db:
            self._require_role(db, *STAFF)
            st = db.query(Student).options(selectinload(Student.room)).filter(Student.id == student_id).first()
            if not st:
                raise not_found("Student", student_id)

            for field, val in data.model_dump(exclude_unset=True).items():
                if val is not None:
                    setattr(st, field, val)

            db.flush()
            return schemas.StudentRow.model_validate(st)

    def delete(self, student_id: str) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)
            st = db.get(Student, student_id)
            if not st:
                raise not_found("Student", student_id)
            room = st.room
            db.delete(st)
            refresh_room_status(db, room)

# hostel/crud/complaints.py
from __future__ import annotations

from typing import List

from sqlalchemy.orm import selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Complaint, Student, utcnow
from ..repositories import ComplaintRepository
from .base import SqlRepository, log_activity, not_found
from .students import STAFF


class SqlComplaintRepository(SqlRepository, ComplaintRepository):

    def _query(self, db):
        return (
            db.query(Complaint)
            .options(selectinload(Complaint.student).selectinload(Student.room))
            .order_by(Complaint.created_at.desc())
        )

    def list(self) -> List[schemas.ComplaintRow]:
        with self._db() as db:
            self._current_profile(db)
            return [schemas.ComplaintRow.model_validate(c) for c in self._query(db).all()]

    def list_pending(self, limit: int = 5) -> List[schemas.ComplaintRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = self._query(db).filter(Complaint.status == "Pending").limit(limit).all()
            return [schemas.ComplaintRow.model_validate(c) for c in rows]

    # =========================================================
    # 🧩 Procedure: add_complaint
    # =========================================================
    def add(self, data: schemas.ComplaintCreate) -> None:
        with self._db() as db:
            profile = self._current_profile(db)
            st = db.get(Student, data.student_id)
            if st is None:
                raise not_found("Student", data.student_id)
            # students may only file for themselves
            if profile.role == "Student" and st.user_id != profile.id:
                raise RemoteError("You can only file complaints for your own account", code="42501", status=403)

            db.add(Complaint(
                title=data.title.strip(),
                description=data.description,
                student_id=st.id,
                status="Pending",
                created_at=utcnow(),
            ))
            room = f" in {st.room.room_no}" if st.room else ""
            log_activity(db, f"New complaint{room}: {data.title}", "shield-alert")

    # =========================================================
    # 🧩 Procedure: resolve_complaint
    # =========================================================
    def resolve(self, complaint_id: str) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)
            c = db.get(Complaint, complaint_id)
            if c is None:
                raise not_found("Complaint", complaint_id)
            if c.status == "Resolved":
                raise RemoteError("Complaint is already resolved", code="P0001", status=400)
            c.status = "Resolved"

# hostel/crud/visitors.py
from __future__ import annotations

from typing import List

from sqlalchemy.orm import selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Student, Visitor, utcnow
from ..repositories import VisitorRepository
from .base import SqlRepository, log_activity, not_found
from .students import STAFF


class SqlVisitorRepository(SqlRepository, VisitorRepository):

    def list(self) -> List[schemas.VisitorRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Visitor)
                .options(selectinload(Visitor.student).selectinload(Student.room))
                .order_by(Visitor.in_time.desc())
                .all()
            )
            return [schemas.VisitorRow.model_validate(r) for r in rows]

    # =========================================================
    # 🧩 Procedure: log_visitor
    # =========================================================
    def log(self, data: schemas.VisitorCreate) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)
            st = db.get(Student, data.student_id)
            if st is None:
                raise not_found("Student", data.student_id)
            if st.status != "Active":
                raise RemoteError(f"{st.name} is not an active resident", code="P0001", status=400)

            db.add(Visitor(
                name=data.name.strip(),
                contact=data.contact,
                purpose=data.purpose,
                student_id=st.id,
                in_time=utcnow(),
            ))
            log_activity(db, f"{data.name} checked in to visit {st.name}", "user-check")

    # =========================================================
    # 🧩 Procedure: checkout_visitor
    # =========================================================
    def checkout(self, visitor_id: str) -> None:
        with self._db() as db:
            self._require_role(db, *STAFF)
            v = db.get(Visitor, visitor_id)
            if v is None:
                raise not_found("Visitor", visitor_id)
            if v.out_time is not None:
                raise RemoteError(f"{v.name} has already checked out", code="P0001", status=400)
            v.out_time = utcnow()

# hostel/controllers/students.py
from __future__ import annotations

import logging
from typing import List, Optional

from .. import filters, schemas
from ..errors import RemoteError, Result
from .base import PageController

logger = logging.getLogger(__name__)


class StudentsController(PageController[schemas.StudentRow]):
    entity = "students"

    def _load(self) -> List[schemas.StudentRow]:
        return self.backend.students.list()

    def filter(self, term: Optional[str] = None, status: Optional[str] = None) -> List[schemas.StudentRow]:
        return filters.apply(
            self.rows,
            filters.by_term(term, lambda s: (s.name,)),
            filters.by_exact(status, lambda s: s.status),
        )

    # =========================================================
    # ➕ Create: identity first, then details + room allocation
    # =========================================================
    def create(self, data: schemas.StudentCreate) -> Result[schemas.AuthUser]:
        """
        Two remote steps. If the second one fails the identity created in the
        first is deleted again; that cleanup is best effort, not atomic.
        """
        try:
            auth = self.backend.auth.register(schemas.SignUpIn(
                email=data.email,
                password=data.password,
                full_name=data.full_name,
                role="Student",
            ))
        except RemoteError as e:
            self.toasts.error(f"Error creating user: {e.message}")
            return Result.failure(e)

        user = auth.user
        if user is None:
            self.toasts.warning("User created, but verification is needed. Cannot update details yet.")
            return Result.failure(RemoteError("Email verification pending", code="verification_pending"))

        try:
            self.backend.students.update_details_and_allocate_room(user.id, data)
        except RemoteError as e:
            message = f"Error updating details: {e.message}"
            if not self._compensate(user.id):
                message += f" (the account {user.email} could not be removed)"
            self.toasts.error(message)
            return Result.failure(e)

        self.toasts.success("Student created and details saved successfully!")
        self.fetch()
        return Result.success(user)

    def _compensate(self, user_id: str) -> bool:
        try:
            self.backend.auth.delete_user(user_id)
            logger.info(f"[students] removed identity {user_id} after failed allocation")
            return True
        except RemoteError as e:
            logger.warning(f"[students] compensation failed for {user_id}: {e.message}")
            return False

    # =========================================================
    # ✏️ Update / 🗑 Delete
    # =========================================================
    def update(self, student_id: str, data: schemas.StudentUpdate) -> Result[schemas.StudentRow]:
        return self._mutate(
            lambda: self.backend.students.update(student_id, data),
            "Student updated successfully!",
        )

    def delete(self, student_id: str) -> Result[None]:
        return self._mutate(
            lambda: self.backend.students.delete(student_id),
            "Student record deleted successfully!",
            refetch=False,
            on_success=lambda _: self._remove_local(student_id),
        )

    # =========================================================
    # 🔎 Detail + form options
    # =========================================================
    def detail(self, student_id: str) -> Result[schemas.StudentDetail]:
        return self._detail(lambda: self.backend.students.get(student_id))

    def available_rooms(self) -> List[schemas.RoomOption]:
        try:
            return self.backend.rooms.list_available()
        except RemoteError as e:
            logger.warning(f"[students] could not load available rooms: {e.message}")
            return []

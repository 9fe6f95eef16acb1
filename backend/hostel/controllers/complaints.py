# hostel/controllers/complaints.py
from __future__ import annotations

from typing import List, Optional

from .. import filters, schemas
from ..errors import RemoteError, Result
from .base import PageController


class ComplaintsController(PageController[schemas.ComplaintRow]):
    entity = "complaints"

    def _load(self) -> List[schemas.ComplaintRow]:
        return self.backend.complaints.list()

    def filter(self, term: Optional[str] = None, status: Optional[str] = None) -> List[schemas.ComplaintRow]:
        return filters.apply(
            self.rows,
            filters.by_term(term, lambda c: (c.student.name if c.student else None, c.title, c.description)),
            filters.by_exact(status, lambda c: c.status),
        )

    def can_resolve(self, complaint: schemas.ComplaintRow) -> bool:
        return self.auth.is_staff() and complaint.status != "Resolved"

    def submit(self, data: schemas.ComplaintIn) -> Result[None]:
        """File a complaint as the signed-in student; one `add_complaint` call, then refetch."""
        profile = self.auth.profile
        if not isinstance(profile, schemas.StudentProfile) or not profile.student_id:
            err = RemoteError("Only students can submit complaints.", code="not_student", status=403)
            self.toasts.error(f"Error: {err.message}")
            return Result.failure(err)
        payload = schemas.ComplaintCreate(
            title=data.title,
            description=data.description,
            student_id=profile.student_id,
        )
        return self._mutate(lambda: self.backend.complaints.add(payload), "Complaint submitted successfully!")

    def resolve(self, complaint_id: str) -> Result[None]:
        return self._mutate(lambda: self.backend.complaints.resolve(complaint_id), "Complaint marked as resolved.")

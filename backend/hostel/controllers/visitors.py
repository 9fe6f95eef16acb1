# hostel/controllers/visitors.py
from __future__ import annotations

import logging
from typing import List, Optional

from .. import filters, schemas
from ..errors import RemoteError, Result
from .base import PageController

logger = logging.getLogger(__name__)


class VisitorsController(PageController[schemas.VisitorRow]):
    entity = "visitors"

    def _load(self) -> List[schemas.VisitorRow]:
        return self.backend.visitors.list()

    def filter(self, term: Optional[str] = None) -> List[schemas.VisitorRow]:
        return filters.apply(
            self.rows,
            filters.by_term(term, lambda v: (v.name, v.student.name if v.student else None)),
        )

    @staticmethod
    def can_check_out(visitor: schemas.VisitorRow) -> bool:
        return visitor.out_time is None

    def log(self, data: schemas.VisitorCreate) -> Result[None]:
        return self._mutate(lambda: self.backend.visitors.log(data), "Visitor logged successfully!")

    def check_out(self, visitor_id: str) -> Result[None]:
        return self._mutate(lambda: self.backend.visitors.checkout(visitor_id), "Visitor checked out.")

    def active_students(self) -> List[schemas.StudentOption]:
        try:
            return self.backend.students.list_active()
        except RemoteError as e:
            logger.warning(f"[visitors] could not load students: {e.message}")
            return []

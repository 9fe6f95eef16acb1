# hostel/controllers/fees.py
from __future__ import annotations

from typing import List, Optional

from .. import filters, schemas
from ..errors import Result
from .base import PageController


class FeesController(PageController[schemas.FeeRow]):
    entity = "fees"

    def _load(self) -> List[schemas.FeeRow]:
        return self.backend.fees.list()

    def filter(self, term: Optional[str] = None, status: Optional[str] = None) -> List[schemas.FeeRow]:
        return filters.apply(
            self.rows,
            filters.by_term(term, lambda f: (f.student_name,)),
            filters.by_exact(status, lambda f: f.status),
        )

    @staticmethod
    def can_record_payment(fee: schemas.FeeRow) -> bool:
        return fee.status != "Paid"

    def record_payment(self, data: schemas.PaymentCreate) -> Result[None]:
        # status comes back from the refetch; it is never worked out here
        return self._mutate(lambda: self.backend.fees.record_payment(data), "Payment recorded successfully!")

    def generate_invoice(self, data: schemas.FeeCreate) -> Result[schemas.FeeRow]:
        return self._mutate(lambda: self.backend.fees.create(data), "Invoice generated successfully!")

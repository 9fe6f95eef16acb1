# hostel/crud/fees.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import func  # type: ignore
from sqlalchemy.orm import selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Fee, Payment, Student, utcnow
from ..repositories import FeeRepository
from .base import SqlRepository, not_found

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class SqlFeeRepository(SqlRepository, FeeRepository):

    def list(self) -> List[schemas.FeeRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Fee)
                .options(selectinload(Fee.student), selectinload(Fee.payments))
                .order_by(Fee.due_date.desc())
                .all()
            )
            return [schemas.FeeRow.model_validate(r) for r in rows]

    def create(self, data: schemas.FeeCreate) -> schemas.FeeRow:
        with self._db() as db:
            self._require_role(db, "Admin")
            if db.get(Student, data.student_id) is None:
                raise not_found("Student", data.student_id)
            fee = Fee(
                student_id=data.student_id,
                total_amount=Decimal(data.total_amount).quantize(CENT),
                due_date=data.due_date,
                status=data.status,
            )
            db.add(fee)
            db.flush()
            db.refresh(fee)
            return schemas.FeeRow.model_validate(fee)

    # =========================================================
    # 🧩 Procedure: record_payment
    # =========================================================
    def record_payment(self, data: schemas.PaymentCreate) -> None:
        with self._db() as db:
            self._require_role(db, "Admin")
            fee = db.query(Fee).options(selectinload(Fee.payments)).filter(Fee.id == data.fee_id).first()
            if not fee:
                raise not_found("Fee", data.fee_id)

            amount = Decimal(data.amount).quantize(CENT)
            if amount <= 0:
                raise RemoteError("Payment amount must be greater than zero", code="P0001", status=400)
            if fee.status == "Paid":
                raise RemoteError("This fee is already fully paid", code="P0001", status=400)

            fee.payments.append(Payment(amount=amount, payment_method=data.payment_method, paid_at=utcnow()))
            db.flush()

            paid = sum((p.amount for p in fee.payments), Decimal("0"))
            if paid >= fee.total_amount:
                fee.status = "Paid"
            logger.info(f"[fees] recorded {amount} on fee {fee.id} -> {fee.status}")

    def total_collected(self) -> Decimal:
        with self._db() as db:
            self._current_profile(db)
            total = db.query(func.coalesce(func.sum(Payment.amount), 0)).scalar()
            return Decimal(str(total or 0))

# hostel/routers/fees_router.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, status  # type: ignore
from pydantic import BaseModel  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import FeeCreate, FeeRow, PaymentCreate, PaymentMethod

router = APIRouter(prefix="/fees", tags=["Fees"])


class PaymentIn(BaseModel):
    amount: Decimal
    payment_method: PaymentMethod = "Card"


@router.get("", response_model=List[FeeRow])
def mount(client: ClientState = Depends(get_client)):
    client.fees.fetch()
    return client.fees.rows


@router.get("/filter", response_model=List[FeeRow])
def filter_fees(
    term: Optional[str] = None,
    status: Optional[str] = None,
    client: ClientState = Depends(get_client),
):
    return client.fees.filter(term=term, status=status)


# 🔵 Admin: new invoice
@router.post("", response_model=List[FeeRow], status_code=status.HTTP_201_CREATED)
def generate_invoice(data: FeeCreate, client: ClientState = Depends(get_client)):
    unwrap(client.fees.generate_invoice(data))
    return client.fees.rows


# 🔵 Admin: payment against a fee
@router.post("/{fee_id}/payments", response_model=List[FeeRow])
def record_payment(fee_id: str, data: PaymentIn, client: ClientState = Depends(get_client)):
    payment = PaymentCreate(fee_id=fee_id, amount=data.amount, payment_method=data.payment_method)
    unwrap(client.fees.record_payment(payment))
    return client.fees.rows

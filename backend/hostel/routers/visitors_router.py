# hostel/routers/visitors_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import StudentOption, VisitorCreate, VisitorRow

router = APIRouter(prefix="/visitors", tags=["Visitors"])


@router.get("", response_model=List[VisitorRow])
def mount(client: ClientState = Depends(get_client)):
    client.visitors.fetch()
    return client.visitors.rows


@router.get("/filter", response_model=List[VisitorRow])
def filter_visitors(term: Optional[str] = None, client: ClientState = Depends(get_client)):
    return client.visitors.filter(term=term)


@router.get("/form/students", response_model=List[StudentOption])
def form_students(client: ClientState = Depends(get_client)):
    return client.visitors.active_students()


@router.post("", response_model=List[VisitorRow], status_code=status.HTTP_201_CREATED)
def log_visitor(data: VisitorCreate, client: ClientState = Depends(get_client)):
    unwrap(client.visitors.log(data))
    return client.visitors.rows


@router.post("/{visitor_id}/checkout", response_model=List[VisitorRow])
def checkout_visitor(visitor_id: str, client: ClientState = Depends(get_client)):
    unwrap(client.visitors.check_out(visitor_id))
    return client.visitors.rows

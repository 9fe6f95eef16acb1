# hostel/routers/complaints_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import ComplaintIn, ComplaintRow

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.get("", response_model=List[ComplaintRow])
def mount(client: ClientState = Depends(get_client)):
    client.complaints.fetch()
    return client.complaints.rows


@router.get("/filter", response_model=List[ComplaintRow])
def filter_complaints(
    term: Optional[str] = None,
    status: Optional[str] = None,
    client: ClientState = Depends(get_client),
):
    return client.complaints.filter(term=term, status=status)


# 🟢 Student: file a complaint
@router.post("", response_model=List[ComplaintRow], status_code=status.HTTP_201_CREATED)
def submit_complaint(data: ComplaintIn, client: ClientState = Depends(get_client)):
    unwrap(client.complaints.submit(data))
    return client.complaints.rows


# 🔵 Staff: mark resolved
@router.post("/{complaint_id}/resolve", response_model=List[ComplaintRow])
def resolve_complaint(complaint_id: str, client: ClientState = Depends(get_client)):
    unwrap(client.complaints.resolve(complaint_id))
    return client.complaints.rows

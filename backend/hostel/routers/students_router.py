# hostel/routers/students_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status  # type: ignore

from ..clients import ClientState
from ..deps import get_client, unwrap
from ..schemas import RoomOption, StudentCreate, StudentDetail, StudentRow, StudentUpdate

router = APIRouter(prefix="/students", tags=["Students"])


# ==========================
# 📋 Table
# ==========================
@router.get("", response_model=List[StudentRow])
def mount(client: ClientState = Depends(get_client)):
    client.students.fetch()
    return client.students.rows


@router.get("/filter", response_model=List[StudentRow])
def filter_students(
    term: Optional[str] = None,
    status: Optional[str] = None,
    client: ClientState = Depends(get_client),
):
    return client.students.filter(term=term, status=status)


@router.get("/form/rooms", response_model=List[RoomOption])
def form_rooms(client: ClientState = Depends(get_client)):
    return client.students.available_rooms()


# ==========================
# ✏️ Mutations
# ==========================
@router.post("", response_model=List[StudentRow], status_code=status.HTTP_201_CREATED)
def create_student(data: StudentCreate, client: ClientState = Depends(get_client)):
    unwrap(client.students.create(data))
    return client.students.rows


@router.patch("/{student_id}", response_model=List[StudentRow])
def update_student(student_id: str, data: StudentUpdate, client: ClientState = Depends(get_client)):
    unwrap(client.students.update(student_id, data))
    return client.students.rows


@router.delete("/{student_id}", response_model=List[StudentRow])
def delete_student(student_id: str, client: ClientState = Depends(get_client)):
    unwrap(client.students.delete(student_id))
    return client.students.rows


# ==========================
# 🔎 Detail
# ==========================
@router.get("/{student_id}", response_model=StudentDetail)
def student_detail(student_id: str, client: ClientState = Depends(get_client)):
    res = client.students.detail(student_id)
    if res.error is not None:
        raise HTTPException(status_code=404, detail="Student not found.")
    return res.data

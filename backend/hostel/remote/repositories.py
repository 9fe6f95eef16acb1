# hostel/remote/repositories.py
from __future__ import annotations

from decimal import Decimal
from typing import List

from .. import schemas
from ..repositories import (
    ActivityRepository, ComplaintRepository, FeeRepository, NoticeRepository,
    ProfileRepository, RoomRepository, StudentRepository, VisitorRepository,
)
from .client import RemoteClient

PROFILE_SELECT = "*, students:students(id)"
STUDENT_LIST_SELECT = "*, rooms(room_no)"
STUDENT_DETAIL_SELECT = """
    *,
    rooms ( room_no, block, type ),
    fees ( *, payments ( * ) )
"""
ROOM_LIST_SELECT = "*, students(name)"
ROOM_DETAIL_SELECT = "*, students(*)"
FEE_SELECT = "*, students(name)"
WITH_STUDENT_ROOM = "*, students(name, rooms(room_no))"
NOTICE_SELECT = "*, profiles(full_name)"


def _rows(model, data) -> list:
    return [model.model_validate(r) for r in (data or [])]


class _RemoteRepository:
    def __init__(self, client: RemoteClient):
        self._client = client


class RemoteProfileRepository(_RemoteRepository, ProfileRepository):

    def get(self, user_id: str) -> schemas.ProfileRecord:
        res = self._client.table("profiles").select(PROFILE_SELECT).eq("id", user_id).single().execute()
        return schemas.ProfileRecord.model_validate(res.data)

    def update(self, user_id: str, data: schemas.ProfileUpdate) -> schemas.ProfileRecord:
        res = (
            self._client.table("profiles")
            .update({"full_name": data.full_name})
            .eq("id", user_id)
            .select(PROFILE_SELECT)
            .single()
            .execute()
        )
        return schemas.ProfileRecord.model_validate(res.data)


class RemoteStudentRepository(_RemoteRepository, StudentRepository):

    def list(self) -> List[schemas.StudentRow]:
        res = self._client.table("students").select(STUDENT_LIST_SELECT).execute()
        return _rows(schemas.StudentRow, res.data)

    def list_active(self) -> List[schemas.StudentOption]:
        res = self._client.table("students").select("id, name").eq("status", "Active").execute()
        return _rows(schemas.StudentOption, res.data)

    def count(self) -> int:
        res = self._client.table("students").select("*", count="exact", head=True).execute()
        return res.count or 0

    def get(self, student_id: str) -> schemas.StudentDetail:
        res = (
            self._client.table("students")
            .select(STUDENT_DETAIL_SELECT)
            .eq("id", student_id)
            .order("due_date", desc=True, foreign_table="fees")
            .single()
            .execute()
        )
        return schemas.StudentDetail.model_validate(res.data)

    def update_details_and_allocate_room(self, user_id: str, data: schemas.StudentCreate) -> None:
        self._client.rpc("update_student_details_and_allocate_room", {
            "p_user_id": user_id,
            "p_course": data.course,
            "p_contact": data.contact,
            "p_joining_date": data.joining_date.isoformat(),
            "p_status": data.status,
            "p_room_id": data.room_id or None,
        })

    def update(self, student_id: str, data: schemas.StudentUpdate) -> schemas.StudentRow:
        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        res = (
            self._client.table("students")
            .update(values)
            .eq("id", student_id)
            .select(STUDENT_LIST_SELECT)
            .single()
            .execute()
        )
        return schemas.StudentRow.model_validate(res.data)

    def delete(self, student_id: str) -> None:
        self._client.table("students").delete().eq("id", student_id).execute()


class RemoteRoomRepository(_RemoteRepository, RoomRepository):

    def list(self) -> List[schemas.RoomRow]:
        res = self._client.table("rooms").select(ROOM_LIST_SELECT).execute()
        return _rows(schemas.RoomRow, res.data)

    def list_available(self) -> List[schemas.RoomOption]:
        res = self._client.table("rooms").select("id, room_no").eq("status", "Available").execute()
        return _rows(schemas.RoomOption, res.data)

    def get(self, room_id: str) -> schemas.RoomRow:
        res = self._client.table("rooms").select(ROOM_DETAIL_SELECT).eq("id", room_id).single().execute()
        return schemas.RoomRow.model_validate(res.data)

    def add(self, data: schemas.RoomCreate) -> None:
        self._client.rpc("add_room", {
            "p_room_no": data.room_no,
            "p_block": data.block,
            "p_type": data.type,
            "p_capacity": data.capacity,
        })

    def update(self, room_id: str, data: schemas.RoomUpdate) -> schemas.RoomRow:
        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        res = (
            self._client.table("rooms")
            .update(values)
            .eq("id", room_id)
            .select(ROOM_LIST_SELECT)
            .single()
            .execute()
        )
        return schemas.RoomRow.model_validate(res.data)

    def delete(self, room_id: str) -> None:
        self._client.table("rooms").delete().eq("id", room_id).execute()


class RemoteFeeRepository(_RemoteRepository, FeeRepository):

    def list(self) -> List[schemas.FeeRow]:
        res = self._client.table("fees").select(FEE_SELECT).order("due_date", desc=True).execute()
        return _rows(schemas.FeeRow, res.data)

    def create(self, data: schemas.FeeCreate) -> schemas.FeeRow:
        res = (
            self._client.table("fees")
            .insert([{
                "student_id": data.student_id,
                "total_amount": str(data.total_amount),
                "due_date": data.due_date.isoformat(),
                "status": data.status,
            }])
            .select(FEE_SELECT)
            .single()
            .execute()
        )
        return schemas.FeeRow.model_validate(res.data)

    def record_payment(self, data: schemas.PaymentCreate) -> None:
        self._client.rpc("record_payment", {
            "p_fee_id": data.fee_id,
            "p_amount": str(data.amount),
            "p_payment_method": data.payment_method,
        })

    def total_collected(self) -> Decimal:
        res = self._client.table("payments").select("amount").execute()
        return sum((Decimal(str(p["amount"])) for p in (res.data or [])), Decimal("0"))


class RemoteVisitorRepository(_RemoteRepository, VisitorRepository):

    def list(self) -> List[schemas.VisitorRow]:
        res = (
            self._client.table("visitors")
            .select(WITH_STUDENT_ROOM)
            .order("in_time", desc=True)
            .execute()
        )
        return _rows(schemas.VisitorRow, res.data)

    def log(self, data: schemas.VisitorCreate) -> None:
        self._client.rpc("log_visitor", {
            "p_name": data.name,
            "p_contact": data.contact,
            "p_student_id": data.student_id,
            "p_purpose": data.purpose,
        })

    def checkout(self, visitor_id: str) -> None:
        self._client.rpc("checkout_visitor", {"p_visitor_id": visitor_id})


class RemoteComplaintRepository(_RemoteRepository, ComplaintRepository):

    def list(self) -> List[schemas.ComplaintRow]:
        res = (
            self._client.table("complaints")
            .select(WITH_STUDENT_ROOM)
            .order("created_at", desc=True)
            .execute()
        )
        return _rows(schemas.ComplaintRow, res.data)

    def list_pending(self, limit: int = 5) -> List[schemas.ComplaintRow]:
        res = (
            self._client.table("complaints")
            .select(WITH_STUDENT_ROOM)
            .eq("status", "Pending")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return _rows(schemas.ComplaintRow, res.data)

    def add(self, data: schemas.ComplaintCreate) -> None:
        self._client.rpc("add_complaint", {
            "p_title": data.title,
            "p_description": data.description,
            "p_student_id": data.student_id,
        })

    def resolve(self, complaint_id: str) -> None:
        self._client.rpc("resolve_complaint", {"p_complaint_id": complaint_id})


class RemoteNoticeRepository(_RemoteRepository, NoticeRepository):

    def list(self) -> List[schemas.NoticeRow]:
        res = (
            self._client.table("notices")
            .select(NOTICE_SELECT)
            .order("created_at", desc=True)
            .execute()
        )
        return _rows(schemas.NoticeRow, res.data)

    def create(self, data: schemas.NoticeCreate) -> schemas.NoticeRow:
        res = (
            self._client.table("notices")
            .insert([data.model_dump()])
            .select(NOTICE_SELECT)
            .single()
            .execute()
        )
        return schemas.NoticeRow.model_validate(res.data)

    def delete(self, notice_id: str) -> None:
        self._client.table("notices").delete().eq("id", notice_id).execute()


class RemoteActivityRepository(_RemoteRepository, ActivityRepository):

    def recent(self) -> List[schemas.ActivityRow]:
        return _rows(schemas.ActivityRow, self._client.rpc("get_recent_activity"))

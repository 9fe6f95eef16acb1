# hostel/schemas.py
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, computed_field  # type: ignore

Role = Literal["Admin", "Warden", "Student"]
StudentStatus = Literal["Active", "Inactive"]
RoomType = Literal["Single", "Double", "Triple"]
RoomStatus = Literal["Available", "Occupied", "Maintenance"]
FeeStatus = Literal["Pending", "Paid", "Overdue"]
PaymentMethod = Literal["Card", "Bank Transfer", "Cash"]
ComplaintStatus = Literal["Pending", "In Progress", "Resolved"]

# Rows coming back from either backend: ORM objects (attribute names) or
# REST payloads (embedded relations are keyed by table name, e.g. "rooms").
ROW_CONFIG = ConfigDict(from_attributes=True, populate_by_name=True, extra="ignore")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# =========================================================
# AUTH
# =========================================================
class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    model_config = ConfigDict(extra="ignore")


class AuthSession(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: datetime
    user: AuthUser
    model_config = ConfigDict(extra="ignore")

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or _utcnow()
        expires_at = self.expires_at
        if expires_at.tzinfo is not None:
            expires_at = expires_at.astimezone(timezone.utc).replace(tzinfo=None)
        return expires_at <= now


class AuthResponse(BaseModel):
    user: Optional[AuthUser] = None
    session: Optional[AuthSession] = None


class SignInIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    model_config = ConfigDict(extra="ignore")


class SignUpIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    role: Role = "Student"
    model_config = ConfigDict(extra="ignore")


# =========================================================
# PROFILES
# =========================================================
class IdRef(BaseModel):
    id: str
    model_config = ROW_CONFIG


class ProfileRecord(BaseModel):
    """Raw profile row joined to its student record(s)."""
    id: str
    full_name: Optional[str] = None
    role: Optional[str] = None
    students: List[IdRef] = Field(default_factory=list)
    model_config = ROW_CONFIG


class AdminProfile(BaseModel):
    id: str
    full_name: Optional[str] = None
    role: Literal["Admin"] = "Admin"


class WardenProfile(BaseModel):
    id: str
    full_name: Optional[str] = None
    role: Literal["Warden"] = "Warden"


class StudentProfile(BaseModel):
    id: str
    full_name: Optional[str] = None
    role: Literal["Student"] = "Student"
    student_id: Optional[str] = None


Profile = Union[AdminProfile, WardenProfile, StudentProfile]


def resolve_profile(record: ProfileRecord) -> Profile:
    """Turn the joined profile row into its typed variant, once, at fetch time."""
    if record.role == "Admin":
        return AdminProfile(id=record.id, full_name=record.full_name)
    if record.role == "Warden":
        return WardenProfile(id=record.id, full_name=record.full_name)
    student_id = record.students[0].id if record.students else None
    return StudentProfile(id=record.id, full_name=record.full_name, student_id=student_id)


class ProfileUpdate(BaseModel):
    full_name: str = Field(min_length=1)
    model_config = ConfigDict(extra="ignore")


# =========================================================
# SHARED REFERENCES (embedded relations)
# =========================================================
class RoomRef(BaseModel):
    id: Optional[str] = None
    room_no: Optional[str] = None
    block: Optional[str] = None
    type: Optional[str] = None
    model_config = ROW_CONFIG


class StudentRef(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    room: Optional[RoomRef] = Field(default=None, validation_alias=AliasChoices("room", "rooms"))
    model_config = ROW_CONFIG


class AuthorRef(BaseModel):
    full_name: Optional[str] = None
    model_config = ROW_CONFIG


# =========================================================
# STUDENTS
# =========================================================
class StudentRow(BaseModel):
    id: str
    user_id: Optional[str] = None
    name: str
    email: Optional[str] = None
    contact: Optional[str] = None
    course: Optional[str] = None
    joining_date: Optional[date] = None
    status: str = "Active"
    room_id: Optional[str] = None
    room: Optional[RoomRef] = Field(default=None, validation_alias=AliasChoices("room", "rooms"))
    model_config = ROW_CONFIG

    @computed_field  # type: ignore[misc]
    @property
    def room_no(self) -> Optional[str]:
        return self.room.room_no if self.room else None


class StudentCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    course: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    joining_date: date = Field(default_factory=date.today)
    status: StudentStatus = "Active"
    room_id: Optional[str] = None
    model_config = ConfigDict(extra="ignore")


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    course: Optional[str] = None
    status: Optional[StudentStatus] = None
    model_config = ConfigDict(extra="ignore")


# =========================================================
# FEES & PAYMENTS
# =========================================================
class PaymentRow(BaseModel):
    id: str
    fee_id: str
    amount: Decimal
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    model_config = ROW_CONFIG


class FeeRow(BaseModel):
    id: str
    student_id: str
    total_amount: Decimal
    due_date: date
    status: str = "Pending"
    student: Optional[StudentRef] = Field(default=None, validation_alias=AliasChoices("student", "students"))
    payments: List[PaymentRow] = Field(default_factory=list)
    model_config = ROW_CONFIG

    # Derived at display time only, never written back.
    @computed_field  # type: ignore[misc]
    @property
    def paid_amount(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))

    @computed_field  # type: ignore[misc]
    @property
    def balance(self) -> Decimal:
        return self.total_amount - self.paid_amount

    @computed_field  # type: ignore[misc]
    @property
    def student_name(self) -> str:
        return (self.student.name if self.student else None) or ""


class FeeCreate(BaseModel):
    student_id: str = Field(min_length=1)
    total_amount: Decimal
    due_date: date
    status: FeeStatus = "Pending"
    model_config = ConfigDict(extra="ignore")


class PaymentCreate(BaseModel):
    fee_id: str = Field(min_length=1)
    amount: Decimal
    payment_method: PaymentMethod = "Card"
    model_config = ConfigDict(extra="ignore")


class StudentDetail(StudentRow):
    fees: List[FeeRow] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def latest_fee(self) -> Optional[FeeRow]:
        return self.fees[0] if self.fees else None


# =========================================================
# ROOMS
# =========================================================
class OccupantRow(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    course: Optional[str] = None
    contact: Optional[str] = None
    status: Optional[str] = None
    model_config = ROW_CONFIG


class RoomRow(BaseModel):
    id: str
    room_no: str
    block: str
    type: str
    capacity: int = 1
    status: str = "Available"
    students: List[OccupantRow] = Field(default_factory=list)
    model_config = ROW_CONFIG

    @computed_field  # type: ignore[misc]
    @property
    def occupant_name(self) -> Optional[str]:
        return self.students[0].name if self.students else None


class RoomOption(BaseModel):
    id: str
    room_no: str
    model_config = ROW_CONFIG


class RoomCreate(BaseModel):
    room_no: str = Field(min_length=1)
    block: str = "A"
    type: RoomType = "Single"
    capacity: int = Field(default=1, ge=1, le=10)
    model_config = ConfigDict(extra="ignore")


class RoomUpdate(BaseModel):
    block: Optional[str] = None
    type: Optional[RoomType] = None
    capacity: Optional[int] = Field(default=None, ge=1, le=10)
    status: Optional[RoomStatus] = None
    model_config = ConfigDict(extra="ignore")


# =========================================================
# VISITORS
# =========================================================
class VisitorRow(BaseModel):
    id: str
    name: str
    contact: Optional[str] = None
    purpose: Optional[str] = None
    student_id: str
    in_time: datetime
    out_time: Optional[datetime] = None
    student: Optional[StudentRef] = Field(default=None, validation_alias=AliasChoices("student", "students"))
    model_config = ROW_CONFIG

    @computed_field  # type: ignore[misc]
    @property
    def checked_in(self) -> bool:
        return self.out_time is None


class StudentOption(BaseModel):
    id: str
    name: str
    model_config = ROW_CONFIG


class VisitorCreate(BaseModel):
    name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    purpose: str = Field(min_length=1)
    model_config = ConfigDict(extra="ignore")


# =========================================================
# COMPLAINTS
# =========================================================
class ComplaintRow(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    student_id: str
    status: str = "Pending"
    created_at: datetime
    student: Optional[StudentRef] = Field(default=None, validation_alias=AliasChoices("student", "students"))
    model_config = ROW_CONFIG


class ComplaintIn(BaseModel):
    """What the complaint form submits; the student id comes from the signed-in profile."""
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    model_config = ConfigDict(extra="ignore")


class ComplaintCreate(ComplaintIn):
    student_id: str = Field(min_length=1)


# =========================================================
# NOTICES (ANNOUNCEMENTS)
# =========================================================
class NoticeRow(BaseModel):
    id: str
    title: str
    message: str
    user_id: Optional[str] = None
    created_at: datetime
    author: Optional[AuthorRef] = Field(default=None, validation_alias=AliasChoices("author", "profiles"))
    model_config = ROW_CONFIG


class NoticeIn(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    model_config = ConfigDict(extra="ignore")


class NoticeCreate(NoticeIn):
    user_id: str = Field(min_length=1)


# =========================================================
# DASHBOARD
# =========================================================
class ActivityRow(BaseModel):
    id: str
    text: str
    icon: str = "default"
    created_at: datetime
    model_config = ROW_CONFIG


class BlockOccupancy(BaseModel):
    name: str
    occupied: int = 0
    available: int = 0


class DashboardStats(BaseModel):
    students: int = 0
    rooms_available: int = 0
    fees_collected: Decimal = Decimal("0")
    pending_complaints: int = 0


class DashboardData(BaseModel):
    welcome_name: str = "User"
    stats: DashboardStats = Field(default_factory=DashboardStats)
    occupancy: List[BlockOccupancy] = Field(default_factory=list)
    recent_complaints: List[ComplaintRow] = Field(default_factory=list)
    recent_activity: List[ActivityRow] = Field(default_factory=list)

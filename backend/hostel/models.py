# hostel/models.py
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (  # type: ignore
    Column, Integer, DateTime, ForeignKey, Date, Numeric,
    UniqueConstraint, CheckConstraint, Index
)  # type: ignore
from sqlalchemy.orm import relationship  # type: ignore
from sqlalchemy.sql import func  # type: ignore
from sqlalchemy.types import Unicode, UnicodeText  # type: ignore

from .database import Base


def _uuid() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp with microseconds, so rows created in the same second still sort."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ==============================
# 🔑 AUTH USERS (identity, owned by the auth service)
# ==============================
class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    email = Column(Unicode(255), unique=True, index=True, nullable=False)
    hashed_password = Column(Unicode(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    profile = relationship(
        "Profile", back_populates="user",
        uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )


# ==============================
# 🧍 PROFILES
# ==============================
class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Unicode(36), ForeignKey("auth_users.id", ondelete="CASCADE"), primary_key=True)
    full_name = Column(Unicode(100), nullable=True)
    role = Column(Unicode(20), nullable=False, default="Student")  # Admin | Warden | Student
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("AuthUser", back_populates="profile")
    students = relationship(
        "Student", back_populates="profile",
        cascade="all, delete-orphan", passive_deletes=True
    )
    notices = relationship("Notice", back_populates="author")

    __table_args__ = (
        CheckConstraint("role in ('Admin','Warden','Student')", name="ck_profiles_role"),
    )


# ==============================
# 🛏️ ROOMS
# ==============================
class Room(Base):
    __tablename__ = "rooms"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    room_no = Column(Unicode(20), nullable=False, index=True)
    block = Column(Unicode(10), nullable=False, default="A")
    type = Column(Unicode(20), nullable=False, default="Single")       # Single | Double | Triple
    capacity = Column(Integer, nullable=False, default=1)
    status = Column(Unicode(20), nullable=False, default="Available")  # Available | Occupied | Maintenance
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    students = relationship("Student", back_populates="room")

    __table_args__ = (
        UniqueConstraint("block", "room_no", name="uq_rooms_block_room_no"),
        CheckConstraint("type in ('Single','Double','Triple')", name="ck_rooms_type"),
        CheckConstraint("status in ('Available','Occupied','Maintenance')", name="ck_rooms_status"),
        CheckConstraint("capacity >= 1", name="ck_rooms_capacity"),
    )


# ==============================
# 🎓 STUDENTS
# ==============================
class Student(Base):
    __tablename__ = "students"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    user_id = Column(Unicode(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True, index=True)

    name = Column(Unicode(100), nullable=False)
    email = Column(Unicode(255), nullable=True)
    contact = Column(Unicode(30), nullable=True)
    course = Column(Unicode(150), nullable=True)
    joining_date = Column(Date, nullable=True)
    status = Column(Unicode(20), nullable=False, default="Active")  # Active | Inactive

    room_id = Column(Unicode(36), ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    profile = relationship("Profile", back_populates="students")
    room = relationship("Room", back_populates="students")
    fees = relationship(
        "Fee", back_populates="student",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="Fee.due_date.desc()",
    )
    visitors = relationship(
        "Visitor", back_populates="student",
        cascade="all, delete-orphan", passive_deletes=True
    )
    complaints = relationship(
        "Complaint", back_populates="student",
        cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("status in ('Active','Inactive')", name="ck_students_status"),
        Index("ix_students_status_room", "status", "room_id"),
    )


# ==============================
# 💷 FEES & PAYMENTS
# ==============================
class Fee(Base):
    __tablename__ = "fees"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    student_id = Column(Unicode(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(Unicode(20), nullable=False, default="Pending")  # Pending | Paid | Overdue
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="fees")
    payments = relationship(
        "Payment", back_populates="fee",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="Payment.paid_at",
    )

    __table_args__ = (
        CheckConstraint("status in ('Pending','Paid','Overdue')", name="ck_fees_status"),
    )


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    fee_id = Column(Unicode(36), ForeignKey("fees.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(Unicode(30), nullable=False, default="Card")  # Card | Bank Transfer | Cash
    paid_at = Column(DateTime, nullable=False, default=utcnow)

    fee = relationship("Fee", back_populates="payments")


# ==============================
# 🚪 VISITORS
# ==============================
class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    name = Column(Unicode(100), nullable=False)
    contact = Column(Unicode(30), nullable=True)
    purpose = Column(Unicode(255), nullable=True)
    student_id = Column(Unicode(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    in_time = Column(DateTime, nullable=False, default=utcnow)
    out_time = Column(DateTime, nullable=True)  # NULL = still checked in

    student = relationship("Student", back_populates="visitors")


# ==============================
# 🧾 COMPLAINTS
# ==============================
class Complaint(Base):
    __tablename__ = "complaints"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    title = Column(Unicode(150), nullable=False)
    description = Column(UnicodeText, nullable=True)
    student_id = Column(Unicode(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Unicode(20), nullable=False, default="Pending")  # Pending | In Progress | Resolved
    created_at = Column(DateTime, nullable=False, default=utcnow)

    student = relationship("Student", back_populates="complaints")

    __table_args__ = (
        CheckConstraint("status in ('Pending','In Progress','Resolved')", name="ck_complaints_status"),
    )


# ==============================
# 📣 NOTICES
# ==============================
class Notice(Base):
    __tablename__ = "notices"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    title = Column(Unicode(150), nullable=False)
    message = Column(UnicodeText, nullable=False)
    user_id = Column(Unicode(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    author = relationship("Profile", back_populates="notices")


# ==============================
# 🕘 ACTIVITY FEED
# ==============================
class Activity(Base):
    __tablename__ = "activity"

    id = Column(Unicode(36), primary_key=True, default=_uuid)
    text = Column(Unicode(255), nullable=False)
    icon = Column(Unicode(30), nullable=False, default="default")
    created_at = Column(DateTime, nullable=False, default=utcnow)

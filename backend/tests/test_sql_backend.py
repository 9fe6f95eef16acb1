from datetime import date
from decimal import Decimal

import pytest  # type: ignore

from hostel import schemas
from hostel.crud.backend import build_sql_backend
from hostel.errors import RemoteError

from conftest import PASSWORD, add_room, new_fee, register, signed_in, student_row


def allocate(backend, user_id, room_id, course="Computing"):
    backend.students.update_details_and_allocate_room(user_id, schemas.StudentCreate(
        full_name="ignored",
        email="ignored@hostel.ac.uk",
        password=PASSWORD,
        course=course,
        contact="07700 900123",
        joining_date=date(2026, 9, 1),
        room_id=room_id,
    ))


# ==========================
# Auth
# ==========================
def test_sign_in_rejects_bad_password(session_factory, admin_user):
    backend = build_sql_backend(session_factory)
    with pytest.raises(RemoteError) as exc:
        backend.auth.sign_in(schemas.SignInIn(email="admin@hostel.ac.uk", password="wrong"))
    assert exc.value.message == "Invalid login credentials"
    assert backend.auth.get_session() is None


def test_register_duplicate_email(session_factory, admin_user):
    with pytest.raises(RemoteError, match="User already registered"):
        register(session_factory, "admin@hostel.ac.uk", "Someone")


def test_student_sign_up_creates_student_row(admin, student_user):
    row = student_row(admin, "Sam Student")
    assert row.user_id == student_user.id
    assert row.status == "Active"
    assert row.room_no is None


def test_reads_need_a_session(session_factory, admin_user):
    anonymous = build_sql_backend(session_factory)
    with pytest.raises(RemoteError) as exc:
        anonymous.students.list()
    assert exc.value.status == 401


def test_delete_user_is_admin_only(student, warden_user):
    with pytest.raises(RemoteError) as exc:
        student.auth.delete_user(warden_user.id)
    assert exc.value.status == 403


# ==========================
# Rooms
# ==========================
def test_add_room_starts_available_and_rejects_duplicates(admin):
    room = add_room(admin, "A101", capacity=2, type="Double")
    assert room.status == "Available"
    with pytest.raises(RemoteError, match="already exists in block A"):
        admin.rooms.add(schemas.RoomCreate(room_no="A101", block="A"))
    # same number in another block is fine
    add_room(admin, "A101", block="B")


def test_students_cannot_add_rooms(student):
    with pytest.raises(RemoteError) as exc:
        student.rooms.add(schemas.RoomCreate(room_no="Z1"))
    assert exc.value.code == "42501"


def test_allocation_fills_room_then_rejects(admin, session_factory, student_user):
    other = register(session_factory, "tom@hostel.ac.uk", "Tom Two")
    room = add_room(admin, "A102", capacity=1)

    allocate(admin, student_user.id, room.id)
    assert admin.rooms.get(room.id).status == "Occupied"
    assert student_row(admin, "Sam Student").room_no == "A102"

    with pytest.raises(RemoteError, match="Room A102 is full"):
        allocate(admin, other.id, room.id)
    assert student_row(admin, "Tom Two").room_id is None


def test_moving_out_frees_previous_room(admin, student_user):
    first = add_room(admin, "B1", block="B")
    second = add_room(admin, "B2", block="B")
    allocate(admin, student_user.id, first.id)
    allocate(admin, student_user.id, second.id)
    assert admin.rooms.get(first.id).status == "Available"
    assert admin.rooms.get(second.id).status == "Occupied"


def test_maintenance_room_is_not_allocatable(admin, student_user):
    room = add_room(admin, "C1", block="C")
    admin.rooms.update(room.id, schemas.RoomUpdate(status="Maintenance"))
    with pytest.raises(RemoteError, match="under maintenance"):
        allocate(admin, student_user.id, room.id)


def test_room_with_occupants_cannot_be_deleted(admin, student_user):
    room = add_room(admin, "D1", block="D")
    allocate(admin, student_user.id, room.id)
    with pytest.raises(RemoteError, match="still has occupants"):
        admin.rooms.delete(room.id)


def test_deleting_student_frees_room(admin, student_user):
    room = add_room(admin, "E1", block="E")
    allocate(admin, student_user.id, room.id)
    admin.students.delete(student_row(admin, "Sam Student").id)
    assert admin.rooms.get(room.id).status == "Available"


# ==========================
# Fees
# ==========================
def test_record_payment_partial_then_paid(admin, student_user):
    fee = new_fee(admin, student_row(admin, "Sam Student").id, "500.00")

    admin.fees.record_payment(schemas.PaymentCreate(fee_id=fee.id, amount=Decimal("200")))
    row = next(f for f in admin.fees.list() if f.id == fee.id)
    assert row.status == "Pending"
    assert row.balance == Decimal("300.00")

    admin.fees.record_payment(schemas.PaymentCreate(fee_id=fee.id, amount=Decimal("300"), payment_method="Cash"))
    row = next(f for f in admin.fees.list() if f.id == fee.id)
    assert row.status == "Paid"
    assert row.balance == Decimal("0.00")
    assert admin.fees.total_collected() == Decimal("500.00")

    with pytest.raises(RemoteError, match="already fully paid"):
        admin.fees.record_payment(schemas.PaymentCreate(fee_id=fee.id, amount=Decimal("1")))


def test_record_payment_rejects_non_positive(admin, student_user):
    fee = new_fee(admin, student_row(admin, "Sam Student").id)
    with pytest.raises(RemoteError, match="greater than zero"):
        admin.fees.record_payment(schemas.PaymentCreate(fee_id=fee.id, amount=Decimal("0")))


def test_fees_are_admin_only(admin, warden, student_user):
    sid = student_row(admin, "Sam Student").id
    with pytest.raises(RemoteError) as exc:
        new_fee(warden, sid)
    assert exc.value.status == 403


def test_student_detail_has_latest_fee_first(admin, student_user):
    sid = student_row(admin, "Sam Student").id
    admin.fees.create(schemas.FeeCreate(student_id=sid, total_amount=Decimal("100"), due_date=date(2026, 1, 31)))
    admin.fees.create(schemas.FeeCreate(student_id=sid, total_amount=Decimal("250"), due_date=date(2026, 6, 30)))
    detail = admin.students.get(sid)
    assert [f.total_amount for f in detail.fees] == [Decimal("250.00"), Decimal("100.00")]
    assert detail.latest_fee.total_amount == Decimal("250.00")


# ==========================
# Visitors & complaints
# ==========================
def test_checkout_twice_is_an_error(warden, student_user):
    sid = student_row(warden, "Sam Student").id
    warden.visitors.log(schemas.VisitorCreate(name="Mum", contact="0123", student_id=sid, purpose="Visit"))
    visitor = warden.visitors.list()[0]
    assert visitor.checked_in is True

    warden.visitors.checkout(visitor.id)
    visitor = warden.visitors.list()[0]
    assert visitor.out_time is not None
    assert visitor.checked_in is False

    with pytest.raises(RemoteError, match="already checked out"):
        warden.visitors.checkout(visitor.id)


def test_student_files_only_for_themself(session_factory, student, admin_user):
    register(session_factory, "other@hostel.ac.uk", "Olive Other")
    admin = signed_in(session_factory, "admin@hostel.ac.uk")
    other_id = student_row(admin, "Olive Other").id
    with pytest.raises(RemoteError, match="your own account"):
        student.complaints.add(schemas.ComplaintCreate(title="x", description="y", student_id=other_id))


def test_complaint_lifecycle(student, warden, student_user):
    sid = student_row(warden, "Sam Student").id
    student.complaints.add(schemas.ComplaintCreate(title="Leaky Faucet", description="Drips", student_id=sid))
    pending = warden.complaints.list_pending()
    assert [c.title for c in pending] == ["Leaky Faucet"]
    assert pending[0].status == "Pending"

    with pytest.raises(RemoteError):
        student.complaints.resolve(pending[0].id)

    warden.complaints.resolve(pending[0].id)
    assert warden.complaints.list_pending() == []
    with pytest.raises(RemoteError, match="already resolved"):
        warden.complaints.resolve(pending[0].id)


def test_recent_activity_newest_first_and_capped(admin, session_factory):
    for i in range(6):
        register(session_factory, f"s{i}@hostel.ac.uk", f"Student {i}")
    feed = admin.activity.recent()
    assert len(feed) == 5
    assert feed[0].text == "New student Student 5 registered"
    assert feed[0].icon == "user-plus"


# ==========================
# Notices & profiles
# ==========================
def test_notices_admin_only_and_authored(admin, warden, admin_user):
    row = admin.notices.create(schemas.NoticeCreate(title="Fire drill", message="Friday 10am", user_id=admin_user.id))
    assert row.author.full_name == "Alice Admin"
    with pytest.raises(RemoteError):
        warden.notices.create(schemas.NoticeCreate(title="x", message="y", user_id=admin_user.id))
    admin.notices.delete(row.id)
    assert admin.notices.list() == []


def test_profile_update_syncs_student_name(student, admin, student_user):
    student.profiles.update(student_user.id, schemas.ProfileUpdate(full_name="Samuel Student"))
    assert student_row(admin, "Samuel Student").user_id == student_user.id


def test_profile_update_only_own(student, admin_user):
    with pytest.raises(RemoteError, match="your own profile"):
        student.profiles.update(admin_user.id, schemas.ProfileUpdate(full_name="Hacked"))

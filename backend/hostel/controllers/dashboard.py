# hostel/controllers/dashboard.py
from __future__ import annotations

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Callable, List, TypeVar

from .. import schemas
from ..errors import RemoteError
from ..repositories import Backend
from ..session_store import AuthContext
from ..toasts import ToastQueue

logger = logging.getLogger(__name__)

T = TypeVar("T")


def occupancy_by_block(rooms: List[schemas.RoomRow]) -> List[schemas.BlockOccupancy]:
    """One bar per block, in the order blocks first appear."""
    blocks: "OrderedDict[str, schemas.BlockOccupancy]" = OrderedDict()
    for room in rooms:
        entry = blocks.setdefault(room.block, schemas.BlockOccupancy(name=f"Block {room.block}"))
        if room.status == "Occupied":
            entry.occupied += 1
        elif room.status == "Available":
            entry.available += 1
    return list(blocks.values())


class DashboardController:
    def __init__(self, backend: Backend, toasts: ToastQueue, auth: AuthContext):
        self.backend = backend
        self.toasts = toasts
        self.auth = auth
        self.data = schemas.DashboardData()

    def load(self) -> schemas.DashboardData:
        failed: List[str] = []

        def part(name: str, call: Callable[[], T], default: T) -> T:
            try:
                return call()
            except RemoteError as e:
                logger.warning(f"[dashboard] {name} failed: {e.message}")
                failed.append(name)
                return default

        student_count = part("students", self.backend.students.count, 0)
        rooms = part("rooms", self.backend.rooms.list, [])
        collected = part("payments", self.backend.fees.total_collected, Decimal("0"))
        pending = part("complaints", self.backend.complaints.list_pending, [])
        activity = part("activity", self.backend.activity.recent, [])

        if failed:
            self.toasts.error("Failed to load dashboard data")

        profile = self.auth.profile
        self.data = schemas.DashboardData(
            welcome_name=(profile.full_name if profile and profile.full_name else "User"),
            stats=schemas.DashboardStats(
                students=student_count,
                rooms_available=sum(1 for r in rooms if r.status == "Available"),
                fees_collected=collected,
                pending_complaints=len(pending),
            ),
            occupancy=occupancy_by_block(rooms),
            recent_complaints=pending,
            recent_activity=activity,
        )
        return self.data

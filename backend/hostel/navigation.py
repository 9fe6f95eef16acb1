# hostel/navigation.py
"""
Sidebar model: which pages each role sees.

This only controls visibility. Write permission is enforced by the backend
(role checks in `hostel.crud`, row-level security on the hosted service).
"""
from __future__ import annotations

from typing import NamedTuple, Optional, Tuple


class NavItem(NamedTuple):
    label: str
    href: str
    icon: str


DASHBOARD = NavItem("Dashboard", "/", "Home")
STUDENTS = NavItem("Students", "/students", "Users")
ROOMS = NavItem("Rooms", "/rooms", "BedDouble")
FEES = NavItem("Fees", "/fees", "CircleDollarSign")
VISITORS = NavItem("Visitors", "/visitors", "UserCheck")
COMPLAINTS = NavItem("Complaints", "/complaints", "ShieldAlert")
ANNOUNCEMENTS = NavItem("Announcements", "/announcements", "Megaphone")

SETTINGS_ITEM = NavItem("Settings", "/settings", "Settings")

ADMIN_NAV: Tuple[NavItem, ...] = (DASHBOARD, STUDENTS, ROOMS, FEES, VISITORS, COMPLAINTS, ANNOUNCEMENTS)
WARDEN_NAV: Tuple[NavItem, ...] = (DASHBOARD, STUDENTS, ROOMS, VISITORS, COMPLAINTS, ANNOUNCEMENTS)
STUDENT_NAV: Tuple[NavItem, ...] = (DASHBOARD, ANNOUNCEMENTS, COMPLAINTS)


def navigation_for(role: Optional[str]) -> Tuple[NavItem, ...]:
    """Unknown or missing roles get the student menu, never an empty one."""
    if role == "Admin":
        return ADMIN_NAV
    if role == "Warden":
        return WARDEN_NAV
    return STUDENT_NAV


def navigation_payload(role: Optional[str]) -> dict:
    return {
        "items": [item._asdict() for item in navigation_for(role)],
        "footer": [SETTINGS_ITEM._asdict()],
    }

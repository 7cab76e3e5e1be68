from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role carried by an authenticated identity."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"


class LeaveStatus(str, Enum):
    """Leave approval lifecycle. PENDING is the only entry state."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class GroupBy(str, Enum):
    COURSE = "course"
    STUDENT = "student"

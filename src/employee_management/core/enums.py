from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for access control."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Per-day attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class LeaveStatus(str, Enum):
    """Review state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus, LeaveStatus

MIN_PASSWORD_LENGTH = 8
NAME_MAX_LENGTH = 100
DEFAULT_SESSION_DAYS = 7
DEFAULT_RECENT_LIMIT = 10

ATTENDANCE_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.LATE: "Late",
}

LEAVE_LABELS = {
    LeaveStatus.PENDING: "Pending",
    LeaveStatus.APPROVED: "Approved",
    LeaveStatus.REJECTED: "Rejected",
}

LEAVE_CSS = {
    LeaveStatus.PENDING: "bg-warning text-dark",
    LeaveStatus.APPROVED: "bg-success",
    LeaveStatus.REJECTED: "bg-danger",
}

ATTENDANCE_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.ABSENT: "bg-secondary",
    AttendanceStatus.LATE: "bg-danger",
}

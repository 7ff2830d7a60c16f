from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def create(self, *, employee_id: int, work_date: date, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def update(self, *, attendance_id: int, employee_id: int, work_date: date, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Rows joined with the employee name, newest day first."""

        raise NotImplementedError

    def count_by_status(self, *, work_date: date) -> Dict[AttendanceStatus, int]:
        raise NotImplementedError

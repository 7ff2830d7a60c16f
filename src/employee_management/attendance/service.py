from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..access.gate import Identity, ensure_role
from ..common.validators import FormValidator, require_choice, require_date
from ..core.constants import ATTENDANCE_CSS, ATTENDANCE_LABELS
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceInput:
    employee_id: Any
    work_date: Any
    status: Any


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _validate(self, data: AttendanceInput) -> tuple[int, date, AttendanceStatus]:
        v = FormValidator()
        employee_id: Optional[int] = None
        try:
            employee_id = int(data.employee_id)
        except (TypeError, ValueError):
            v.add("employee_id", "Employee is required")
        if employee_id is not None and self._employees.get_by_id(employee_id) is None:
            v.add("employee_id", "Selected employee does not exist")
        work_date = v.check("work_date", require_date, data.work_date, "Date")
        status = v.check("status", require_choice, data.status, AttendanceStatus, "Status")
        v.raise_if_invalid()
        return employee_id, work_date, status

    def get(self, attendance_id: int) -> AttendanceRecord:
        rec = self._attendance.get_by_id(int(attendance_id))
        if rec is None:
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        return rec

    def record(self, actor: Identity, data: AttendanceInput) -> int:
        ensure_role(actor, Role.ADMIN)
        employee_id, work_date, status = self._validate(data)
        attendance_id = self._attendance.create(employee_id=employee_id, work_date=work_date, status=status)
        logger.info("admin %s recorded attendance %s for employee %s", actor.account_id, attendance_id, employee_id)
        return attendance_id

    def update(self, actor: Identity, attendance_id: int, data: AttendanceInput) -> None:
        ensure_role(actor, Role.ADMIN)
        self.get(attendance_id)
        employee_id, work_date, status = self._validate(data)
        if not self._attendance.update(
            attendance_id=int(attendance_id),
            employee_id=employee_id,
            work_date=work_date,
            status=status,
        ):
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        logger.info("admin %s updated attendance %s", actor.account_id, attendance_id)

    def delete(self, actor: Identity, attendance_id: int) -> None:
        ensure_role(actor, Role.ADMIN)
        if not self._attendance.delete_by_id(int(attendance_id)):
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        logger.info("admin %s deleted attendance %s", actor.account_id, attendance_id)

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(int(employee_id))

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all(employee_id=employee_id)

    def summary_for_date(self, day: date) -> Dict[AttendanceStatus, int]:
        return self._attendance.count_by_status(work_date=day)

    @staticmethod
    def to_ui(r: AttendanceRecord) -> dict:
        return {
            "attendance_id": r.attendance_id,
            "employee_id": r.employee_id,
            "employee_name": r.employee_name or "-",
            "date": r.work_date.strftime("%Y-%m-%d"),
            "status": r.status.value,
            "label": ATTENDANCE_LABELS.get(r.status, r.status.value),
            "css_class": ATTENDANCE_CSS.get(r.status, "bg-secondary"),
        }

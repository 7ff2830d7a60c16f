from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(self, *, employee_id: int, start_date: date, end_date: date, reason: str) -> int:
        """Insert a request; the stored status is always pending."""

        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(self, *, employee_id: Optional[int] = None) -> Sequence[LeaveRequest]:
        """Rows joined with the employee name, in creation order."""

        raise NotImplementedError

    def set_status(self, *, leave_id: int, status: LeaveStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, leave_id: int) -> bool:
        raise NotImplementedError

    def count_by_status(self, *, employee_id: Optional[int] = None) -> Dict[LeaveStatus, int]:
        raise NotImplementedError

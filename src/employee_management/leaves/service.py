from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..access.gate import Identity, ensure_role
from ..common.validators import FormValidator, require_choice, require_date, require_non_empty
from ..core.constants import LEAVE_CSS, LEAVE_LABELS
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaveSubmission:
    """Employee input for a leave request. Carries no status; new requests are always pending."""

    start_date: Any
    end_date: Any
    reason: str


class LeaveService:
    """Submit -> review workflow for leave requests.

    Status starts at pending; an admin may later set any of the three values,
    including moving a request back out of approved/rejected.
    """

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def submit(self, actor: Identity, data: LeaveSubmission) -> int:
        ensure_role(actor, Role.EMPLOYEE)
        if actor.employee_id is None:
            raise AuthorizationError("Only employees with a profile can request leave.")

        v = FormValidator()
        start = v.check("start_date", require_date, data.start_date, "Start date")
        end = v.check("end_date", require_date, data.end_date, "End date")
        reason = v.check("reason", require_non_empty, data.reason, "Reason")
        if start and end and end < start:
            v.add("end_date", "End date must be on or after the start date")
        v.raise_if_invalid()

        leave_id = self._leaves.create(employee_id=actor.employee_id, start_date=start, end_date=end, reason=reason)
        logger.info("employee %s submitted leave %s (%s..%s)", actor.employee_id, leave_id, start, end)
        return leave_id

    def get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        if leave is None:
            raise NotFoundError(f"Leave request {leave_id} not found")
        return leave

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(employee_id=int(employee_id))

    def list_all(self, actor: Identity) -> Sequence[LeaveRequest]:
        ensure_role(actor, Role.ADMIN)
        return self._leaves.list_requests()

    def set_status(self, actor: Identity, leave_id: int, new_status: Any) -> LeaveStatus:
        ensure_role(actor, Role.ADMIN)
        v = FormValidator()
        status = v.check("status", require_choice, new_status, LeaveStatus, "Status")
        v.raise_if_invalid()

        previous = self.get(leave_id).status
        if not self._leaves.set_status(leave_id=int(leave_id), status=status):
            raise NotFoundError(f"Leave request {leave_id} not found")
        logger.info(
            "admin %s changed leave %s status %s -> %s",
            actor.account_id,
            leave_id,
            previous.value,
            status.value,
        )
        return status

    def delete(self, actor: Identity, leave_id: int) -> None:
        ensure_role(actor, Role.ADMIN)
        if not self._leaves.delete_by_id(int(leave_id)):
            raise NotFoundError(f"Leave request {leave_id} not found")
        logger.info("admin %s deleted leave %s", actor.account_id, leave_id)

    def count_by_status(self, *, employee_id: Optional[int] = None) -> Dict[LeaveStatus, int]:
        return self._leaves.count_by_status(employee_id=employee_id)

    @staticmethod
    def to_ui(r: LeaveRequest) -> dict:
        return {
            "leave_id": r.leave_id,
            "employee_id": r.employee_id,
            "employee_name": r.employee_name or "-",
            "start_date": r.start_date.strftime("%Y-%m-%d"),
            "end_date": r.end_date.strftime("%Y-%m-%d"),
            "days": r.days,
            "reason": r.reason,
            "status": r.status.value,
            "label": LEAVE_LABELS.get(r.status, r.status.value),
            "css_class": LEAVE_CSS.get(r.status, "bg-secondary"),
            "created_at": r.created_at.strftime("%Y-%m-%d %H:%M") if r.created_at else "",
        }

from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT r.leave_id, r.employee_id, r.start_date, r.end_date, r.reason,
           r.status, r.created_at, r.updated_at, e.name AS employee_name
    FROM leave_requests r
    JOIN employees e ON e.employee_id = r.employee_id
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        employee_name=r.get("employee_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, start_date: date, end_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_requests(self, *, employee_id: Optional[int] = None) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY r.created_at ASC, r.leave_id ASC",
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def set_status(self, *, leave_id: int, status: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE leave_requests SET status=%s WHERE leave_id=%s", (status.value, int(leave_id)))
            cur.execute("SELECT 1 AS ok FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0

    def count_by_status(self, *, employee_id: Optional[int] = None) -> Dict[LeaveStatus, int]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT status, COUNT(*) AS n FROM leave_requests WHERE {' AND '.join(clauses)} GROUP BY status",
                tuple(params),
            )
            out = {s: 0 for s in LeaveStatus}
            for r in fetchall(cur):
                out[LeaveStatus(r["status"])] = int(r["n"])
            return out

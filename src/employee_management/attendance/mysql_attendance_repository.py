from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.employee_id, a.work_date, a.status,
           a.created_at, a.updated_at, e.name AS employee_name
    FROM attendance_records a
    JOIN employees e ON e.employee_id = a.employee_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        employee_name=r.get("employee_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, work_date: date, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance_records(employee_id, work_date, status) VALUES(%s,%s,%s)",
                (int(employee_id), work_date, status.value),
            )
            return int(cur.lastrowid)

    def update(self, *, attendance_id: int, employee_id: int, work_date: date, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET employee_id=%s, work_date=%s, status=%s
                WHERE attendance_id=%s
                """,
                (int(employee_id), work_date, status.value, int(attendance_id)),
            )
            cur.execute("SELECT 1 AS ok FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self.list_all(employee_id=employee_id)

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY a.work_date DESC, a.attendance_id DESC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_by_status(self, *, work_date: date) -> Dict[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS n
                FROM attendance_records
                WHERE work_date=%s
                GROUP BY status
                """,
                (work_date,),
            )
            out = {s: 0 for s in AttendanceStatus}
            for r in fetchall(cur):
                out[AttendanceStatus(r["status"])] = int(r["n"])
            return out

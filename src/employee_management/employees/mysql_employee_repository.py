from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_email_guard
from .model import EmployeeProfile
from .repository import EmployeeRepository

_COLUMNS = "employee_id, account_id, name, email, phone, department, position, created_at, updated_at"


def _to_profile(row: dict) -> EmployeeProfile:
    return EmployeeProfile(
        employee_id=int(row["employee_id"]),
        account_id=int(row["account_id"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        department=row.get("department"),
        position=row.get("position"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> int:
        with unique_email_guard(), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO accounts(name, email, password_hash, role) VALUES(%s,%s,%s,%s)",
                (name, email, password_hash, Role.EMPLOYEE.value),
            )
            account_id = int(cur.lastrowid)
            cur.execute(
                """
                INSERT INTO employees(account_id, name, email, phone, department, position)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (account_id, name, email, phone, department, position),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        email: str,
        phone: Optional[str],
        department: Optional[str],
        position: Optional[str],
    ) -> bool:
        with unique_email_guard(), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, email=%s, phone=%s, department=%s, position=%s
                WHERE employee_id=%s
                """,
                (name, email, phone, department, position, int(employee_id)),
            )
            cur.execute(
                """
                UPDATE accounts a
                JOIN employees e ON e.account_id = a.account_id
                SET a.name=%s, a.email=%s
                WHERE e.employee_id=%s
                """,
                (name, email, int(employee_id)),
            )
            # rowcount is 0 when nothing changed, so existence is checked separately.
            cur.execute("SELECT 1 AS ok FROM employees WHERE employee_id=%s", (int(employee_id),))
            return fetchone(cur) is not None

    def get_by_id(self, employee_id: int) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_account_id(self, account_id: int) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE account_id=%s", (int(account_id),))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_all(self) -> Sequence[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id ASC")
            return [_to_profile(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

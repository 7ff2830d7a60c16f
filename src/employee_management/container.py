from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.repository import AccountRepository
from .accounts.service import AccountService, AuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import MIN_PASSWORD_LENGTH
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    auth_service: AuthService
    account_service: AccountService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService


def assemble(
    *,
    accounts_repo: AccountRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    conn: Optional[DatabaseConnection] = None,
    min_password_length: int = MIN_PASSWORD_LENGTH,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""
    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        auth_service=AuthService(accounts_repo, employees_repo),
        account_service=AccountService(accounts_repo, employees_repo, min_password_length=min_password_length),
        employee_service=EmployeeService(employees_repo, accounts_repo, min_password_length=min_password_length),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        leave_service=LeaveService(leaves_repo),
    )


def build_container(*, db_config: dict, min_password_length: int = MIN_PASSWORD_LENGTH) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return assemble(
        accounts_repo=MySQLAccountRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        conn=conn,
        min_password_length=min_password_length,
    )

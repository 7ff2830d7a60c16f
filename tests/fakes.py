"""In-memory repositories mirroring the MySQL schema, including its cascades."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from werkzeug.security import generate_password_hash

from employee_management.accounts.model import Account
from employee_management.attendance.model import AttendanceRecord
from employee_management.container import Container, assemble
from employee_management.core.enums import AttendanceStatus, LeaveStatus, Role
from employee_management.core.exceptions import ValidationError
from employee_management.employees.model import EmployeeProfile
from employee_management.leaves.model import LeaveRequest

# Cheap hashes keep the suite fast; the format is still a real werkzeug hash.
FAST_HASH = "pbkdf2:sha256:1000"


class InMemoryStore:
    def __init__(self):
        self.accounts: dict[int, Account] = {}
        self.employees: dict[int, EmployeeProfile] = {}
        self.attendance: dict[int, AttendanceRecord] = {}
        self.leaves: dict[int, LeaveRequest] = {}
        self._ids = {"accounts": 0, "employees": 0, "attendance": 0, "leaves": 0}
        self._clock = datetime(2025, 1, 1, 9, 0, 0)

    def next_id(self, table: str) -> int:
        self._ids[table] += 1
        return self._ids[table]

    def tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    def email_owner(self, email: str) -> Optional[Account]:
        return next((a for a in self.accounts.values() if a.email == email), None)

    def employee_name(self, employee_id: int) -> Optional[str]:
        e = self.employees.get(employee_id)
        return e.name if e else None

    # -- seeding helpers --------------------------------------------------
    def add_admin(self, *, name: str = "Admin", email: str = "admin@x.com", password: str = "admin12345") -> Account:
        account = Account(
            account_id=self.next_id("accounts"),
            name=name,
            email=email,
            password_hash=generate_password_hash(password, method=FAST_HASH),
            role=Role.ADMIN,
        )
        self.accounts[account.account_id] = account
        return account

    def add_employee(self, *, name: str, email: str, password: str = "password1", **profile) -> EmployeeProfile:
        employee_id = EmployeeRepo(self).create(
            name=name,
            email=email,
            password_hash=generate_password_hash(password, method=FAST_HASH),
            **profile,
        )
        return self.employees[employee_id]


class AccountRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, account_id):
        return self._s.accounts.get(int(account_id))

    def get_by_email(self, email):
        return self._s.email_owner(email)

    def delete_by_id(self, account_id):
        if self._s.accounts.pop(int(account_id), None) is None:
            return False
        # ON DELETE CASCADE: accounts -> employees -> attendance / leaves
        for emp in [e for e in self._s.employees.values() if e.account_id == int(account_id)]:
            del self._s.employees[emp.employee_id]
            for rid in [r.attendance_id for r in self._s.attendance.values() if r.employee_id == emp.employee_id]:
                del self._s.attendance[rid]
            for lid in [r.leave_id for r in self._s.leaves.values() if r.employee_id == emp.employee_id]:
                del self._s.leaves[lid]
        return True


class EmployeeRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def create(self, *, name, email, password_hash, phone=None, department=None, position=None):
        # Mirrors the single-transaction insert of account + profile.
        if self._s.email_owner(email):
            raise ValidationError("Email has already been taken", field="email")
        account = Account(
            account_id=self._s.next_id("accounts"),
            name=name,
            email=email,
            password_hash=password_hash,
            role=Role.EMPLOYEE,
            created_at=self._s.tick(),
        )
        self._s.accounts[account.account_id] = account
        account_id = account.account_id
        profile = EmployeeProfile(
            employee_id=self._s.next_id("employees"),
            account_id=account_id,
            name=name,
            email=email,
            phone=phone,
            department=department,
            position=position,
            created_at=self._s.tick(),
        )
        self._s.employees[profile.employee_id] = profile
        return profile.employee_id

    def update(self, *, employee_id, name, email, phone, department, position):
        current = self._s.employees.get(int(employee_id))
        if current is None:
            return False
        owner = self._s.email_owner(email)
        if owner and owner.account_id != current.account_id:
            raise ValidationError("Email has already been taken", field="email")
        self._s.employees[current.employee_id] = replace(
            current, name=name, email=email, phone=phone, department=department, position=position
        )
        account = self._s.accounts[current.account_id]
        self._s.accounts[account.account_id] = replace(account, name=name, email=email)
        return True

    def get_by_id(self, employee_id):
        return self._s.employees.get(int(employee_id))

    def get_by_account_id(self, account_id):
        return next((e for e in self._s.employees.values() if e.account_id == int(account_id)), None)

    def list_all(self):
        return sorted(self._s.employees.values(), key=lambda e: e.employee_id)

    def count(self):
        return len(self._s.employees)


class AttendanceRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def _named(self, r: AttendanceRecord) -> AttendanceRecord:
        return replace(r, employee_name=self._s.employee_name(r.employee_id))

    def create(self, *, employee_id, work_date, status):
        rec = AttendanceRecord(
            attendance_id=self._s.next_id("attendance"),
            employee_id=int(employee_id),
            work_date=work_date,
            status=status,
            created_at=self._s.tick(),
        )
        self._s.attendance[rec.attendance_id] = rec
        return rec.attendance_id

    def update(self, *, attendance_id, employee_id, work_date, status):
        current = self._s.attendance.get(int(attendance_id))
        if current is None:
            return False
        self._s.attendance[current.attendance_id] = replace(
            current, employee_id=int(employee_id), work_date=work_date, status=status
        )
        return True

    def delete_by_id(self, attendance_id):
        return self._s.attendance.pop(int(attendance_id), None) is not None

    def get_by_id(self, attendance_id):
        r = self._s.attendance.get(int(attendance_id))
        return self._named(r) if r else None

    def list_for_employee(self, employee_id):
        return self.list_all(employee_id=employee_id)

    def list_all(self, *, employee_id=None):
        rows = [r for r in self._s.attendance.values() if employee_id is None or r.employee_id == int(employee_id)]
        rows.sort(key=lambda r: (r.work_date, r.attendance_id), reverse=True)
        return [self._named(r) for r in rows]

    def count_by_status(self, *, work_date: date):
        out = {s: 0 for s in AttendanceStatus}
        for r in self._s.attendance.values():
            if r.work_date == work_date:
                out[r.status] += 1
        return out


class LeaveRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def _named(self, r: LeaveRequest) -> LeaveRequest:
        return replace(r, employee_name=self._s.employee_name(r.employee_id))

    def create(self, *, employee_id, start_date, end_date, reason):
        leave = LeaveRequest(
            leave_id=self._s.next_id("leaves"),
            employee_id=int(employee_id),
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=self._s.tick(),
        )
        self._s.leaves[leave.leave_id] = leave
        return leave.leave_id

    def get_by_id(self, leave_id):
        r = self._s.leaves.get(int(leave_id))
        return self._named(r) if r else None

    def list_requests(self, *, employee_id=None):
        rows = [r for r in self._s.leaves.values() if employee_id is None or r.employee_id == int(employee_id)]
        rows.sort(key=lambda r: (r.created_at, r.leave_id))
        return [self._named(r) for r in rows]

    def set_status(self, *, leave_id, status):
        current = self._s.leaves.get(int(leave_id))
        if current is None:
            return False
        self._s.leaves[current.leave_id] = replace(current, status=status, updated_at=self._s.tick())
        return True

    def delete_by_id(self, leave_id):
        return self._s.leaves.pop(int(leave_id), None) is not None

    def count_by_status(self, *, employee_id=None):
        out = {s: 0 for s in LeaveStatus}
        for r in self._s.leaves.values():
            if employee_id is None or r.employee_id == int(employee_id):
                out[r.status] += 1
        return out


def build_container(store: InMemoryStore) -> Container:
    return assemble(
        accounts_repo=AccountRepo(store),
        employees_repo=EmployeeRepo(store),
        attendance_repo=AttendanceRepo(store),
        leaves_repo=LeaveRepo(store),
    )

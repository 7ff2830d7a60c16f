from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeProfile


class EmployeeRepository(Protocol):
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
        """Create an employee-role account and its profile atomically; return the profile id."""

        raise NotImplementedError

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
        """Update the profile and the paired account's name/email atomically."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def get_by_account_id(self, account_id: int) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[EmployeeProfile]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

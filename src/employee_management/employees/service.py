from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..access.gate import Identity, ensure_role
from ..accounts.repository import AccountRepository
from ..common.validators import FormValidator, optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .model import EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewEmployee:
    name: str
    email: str
    password: str
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None


@dataclass(frozen=True)
class EmployeeUpdate:
    name: str
    email: str
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None


class EmployeeService:
    """Use case: admin-driven onboarding, editing and removal of employees."""

    def __init__(
        self,
        employees: EmployeeRepository,
        accounts: AccountRepository,
        *,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self._employees = employees
        self._accounts = accounts
        self._min_password_length = int(min_password_length)

    def list_employees(self) -> Sequence[EmployeeProfile]:
        return self._employees.list_all()

    def count(self) -> int:
        return self._employees.count()

    def get_employee(self, employee_id: int) -> EmployeeProfile:
        profile = self._employees.get_by_id(int(employee_id))
        if profile is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return profile

    def admin_create_employee(self, actor: Identity, data: NewEmployee) -> int:
        ensure_role(actor, Role.ADMIN)

        v = FormValidator()
        name = v.check("name", require_non_empty, data.name, "Name", NAME_MAX_LENGTH)
        email = v.check("email", require_email, data.email)
        password = v.check("password", require_min_length, data.password, "Password", self._min_password_length)
        if email and self._accounts.get_by_email(email):
            v.add("email", "Email has already been taken")
        v.raise_if_invalid()

        employee_id = self._employees.create(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            phone=optional_text(data.phone, 30),
            department=optional_text(data.department),
            position=optional_text(data.position),
        )
        logger.info("admin %s created employee %s", actor.account_id, employee_id)
        return employee_id

    def admin_update_employee(self, actor: Identity, employee_id: int, data: EmployeeUpdate) -> None:
        ensure_role(actor, Role.ADMIN)
        current = self.get_employee(employee_id)

        v = FormValidator()
        name = v.check("name", require_non_empty, data.name, "Name", NAME_MAX_LENGTH)
        email = v.check("email", require_email, data.email)
        if email:
            owner = self._accounts.get_by_email(email)
            if owner and owner.account_id != current.account_id:
                v.add("email", "Email has already been taken")
        v.raise_if_invalid()

        if not self._employees.update(
            employee_id=current.employee_id,
            name=name,
            email=email,
            phone=optional_text(data.phone, 30),
            department=optional_text(data.department),
            position=optional_text(data.position),
        ):
            raise NotFoundError(f"Employee {employee_id} not found")
        logger.info("admin %s updated employee %s", actor.account_id, employee_id)

    def admin_delete_employee(self, actor: Identity, employee_id: int) -> None:
        """Delete through the owning account; profile, attendance and leaves cascade."""
        ensure_role(actor, Role.ADMIN)
        current = self.get_employee(employee_id)

        if not self._accounts.delete_by_id(current.account_id):
            raise NotFoundError(f"Employee {employee_id} not found")
        logger.info("admin %s deleted employee %s (account %s)", actor.account_id, employee_id, current.account_id)

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..access.gate import Identity
from ..common.validators import FormValidator, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.exceptions import AuthenticationError
from ..employees.repository import EmployeeRepository
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)

CREDENTIALS_MESSAGE = "These credentials do not match our records."


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return generate_password_hash("credentials-placeholder")


@dataclass(frozen=True)
class RegistrationForm:
    name: str
    email: str
    password: str
    password_confirmation: str


class AuthService:
    """Use case: authenticate (login) and resolve session identities."""

    def __init__(self, accounts: AccountRepository, employees: EmployeeRepository):
        self._accounts = accounts
        self._employees = employees

    def _identity_for(self, account: Account) -> Identity:
        profile = self._employees.get_by_account_id(account.account_id)
        return Identity(
            account_id=account.account_id,
            name=account.name,
            email=account.email,
            role=account.role,
            employee_id=profile.employee_id if profile else None,
        )

    def authenticate(self, email: str, password: str) -> Identity:
        email = (email or "").strip().lower()
        account = self._accounts.get_by_email(email) if email else None

        if account is None:
            # Same hashing cost as a real check so timing does not leak existence.
            check_password_hash(_dummy_hash(), password or "")
            logger.warning("failed login attempt")
            raise AuthenticationError(CREDENTIALS_MESSAGE)

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.warning("failed login attempt")
            raise AuthenticationError(CREDENTIALS_MESSAGE)

        logger.info("account %s logged in", account.account_id)
        return self._identity_for(account)

    def resolve(self, account_id: int) -> Optional[Identity]:
        account = self._accounts.get_by_id(int(account_id))
        if account is None:
            return None
        return self._identity_for(account)


class AccountService:
    """Use case: self-service registration. Always yields an employee account."""

    def __init__(
        self,
        accounts: AccountRepository,
        employees: EmployeeRepository,
        *,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self._accounts = accounts
        self._employees = employees
        self._min_password_length = int(min_password_length)

    def register(self, form: RegistrationForm) -> int:
        v = FormValidator()
        name = v.check("name", require_non_empty, form.name, "Name", NAME_MAX_LENGTH)
        email = v.check("email", require_email, form.email)
        password = v.check("password", require_min_length, form.password, "Password", self._min_password_length)

        if password is not None and form.password != form.password_confirmation:
            v.add("password", "Password confirmation does not match")
        if email and self._accounts.get_by_email(email):
            v.add("email", "Email has already been taken")
        v.raise_if_invalid()

        employee_id = self._employees.create(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
        )
        profile = self._employees.get_by_id(employee_id)
        account_id = profile.account_id if profile else 0
        logger.info("registered account %s (employee %s)", account_id, employee_id)
        return account_id

import pytest

from employee_management.access.gate import (
    DENIED_MESSAGE,
    HOME_ENDPOINT,
    LOGIN_ENDPOINT,
    Identity,
    Requirement,
    check_access,
    ensure_role,
)
from employee_management.core.enums import Role
from employee_management.core.exceptions import AuthorizationError

ADMIN = Identity(account_id=1, name="Admin", email="admin@x.com", role=Role.ADMIN)
EMPLOYEE = Identity(account_id=2, name="Bob", email="bob@x.com", role=Role.EMPLOYEE, employee_id=1)


@pytest.mark.parametrize("requirement", list(Requirement))
def test_anonymous_is_sent_to_login(requirement):
    decision = check_access(None, requirement)

    assert not decision.allowed
    assert decision.redirect_to == LOGIN_ENDPOINT
    assert decision.message is None


def test_employee_denied_admin_operation_goes_home_with_message():
    decision = check_access(EMPLOYEE, Requirement.ADMIN)

    assert not decision.allowed
    assert decision.redirect_to == HOME_ENDPOINT
    assert decision.message == DENIED_MESSAGE


def test_admin_denied_employee_self_service():
    assert not check_access(ADMIN, Requirement.EMPLOYEE).allowed


@pytest.mark.parametrize(
    "identity, requirement",
    [
        (ADMIN, Requirement.ADMIN),
        (EMPLOYEE, Requirement.EMPLOYEE),
        (ADMIN, Requirement.AUTHENTICATED),
        (EMPLOYEE, Requirement.AUTHENTICATED),
    ],
)
def test_matching_role_is_allowed(identity, requirement):
    decision = check_access(identity, requirement)

    assert decision.allowed
    assert decision.redirect_to is None


def test_ensure_role_raises_for_mismatch_and_missing_identity():
    assert ensure_role(ADMIN, Role.ADMIN) is ADMIN
    with pytest.raises(AuthorizationError):
        ensure_role(EMPLOYEE, Role.ADMIN)
    with pytest.raises(AuthorizationError):
        ensure_role(None, Role.ADMIN, Role.EMPLOYEE)

from __future__ import annotations

import pytest

from employee_management.accounts.service import CREDENTIALS_MESSAGE, RegistrationForm
from employee_management.core.enums import Role
from employee_management.core.exceptions import AuthenticationError, ValidationError


def _form(**overrides) -> RegistrationForm:
    data = dict(name="Alice", email="alice@x.com", password="password1", password_confirmation="password1")
    data.update(overrides)
    return RegistrationForm(**data)


def test_register_creates_employee_account_with_profile(container, store):
    account_id = container.account_service.register(_form())

    account = store.accounts[account_id]
    assert account.role == Role.EMPLOYEE
    assert account.password_hash != "password1"
    profile = container.employees_repo.get_by_account_id(account_id)
    assert profile is not None
    assert (profile.name, profile.email) == ("Alice", "alice@x.com")


def test_register_same_email_twice_fails_on_email_field(container, store):
    container.account_service.register(_form())

    with pytest.raises(ValidationError) as exc:
        container.account_service.register(_form(name="Other Alice", email="ALICE@x.com"))

    assert "email" in exc.value.errors
    assert len(store.accounts) == 1


def test_register_rejects_short_password(container):
    with pytest.raises(ValidationError) as exc:
        container.account_service.register(_form(password="short", password_confirmation="short"))

    assert "at least 8" in exc.value.errors["password"]


def test_register_rejects_mismatched_confirmation(container, store):
    with pytest.raises(ValidationError) as exc:
        container.account_service.register(_form(password_confirmation="password2"))

    assert "confirmation" in exc.value.errors["password"]
    assert store.accounts == {}


def test_register_reports_all_field_errors_at_once(container):
    with pytest.raises(ValidationError) as exc:
        container.account_service.register(_form(name="", email="nope", password="x", password_confirmation="x"))

    assert set(exc.value.errors) == {"name", "email", "password"}


def test_registration_never_produces_admin(container, store):
    for i in range(3):
        container.account_service.register(_form(email=f"user{i}@x.com"))

    assert all(a.role == Role.EMPLOYEE for a in store.accounts.values())


def test_authenticate_returns_identity_with_employee_profile(container, alice_profile):
    identity = container.auth_service.authenticate("alice@x.com", "password1")

    assert identity.account_id == alice_profile.account_id
    assert identity.role == Role.EMPLOYEE
    assert identity.employee_id == alice_profile.employee_id


def test_authenticate_admin_has_no_profile(container, admin_account):
    identity = container.auth_service.authenticate("admin@x.com", "admin12345")

    assert identity.is_admin
    assert identity.employee_id is None


def test_authentication_errors_do_not_reveal_which_part_failed(container, alice_profile):
    with pytest.raises(AuthenticationError) as wrong_password:
        container.auth_service.authenticate("alice@x.com", "wrong-password")
    with pytest.raises(AuthenticationError) as unknown_email:
        container.auth_service.authenticate("nobody@x.com", "password1")

    assert str(wrong_password.value) == str(unknown_email.value) == CREDENTIALS_MESSAGE


def test_authenticate_with_corrupted_hash_fails_generically(container, store, alice_profile):
    from dataclasses import replace

    account = store.accounts[alice_profile.account_id]
    store.accounts[account.account_id] = replace(account, password_hash="CHANGE_ME")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("alice@x.com", "password1")


def test_resolve_missing_account_returns_none(container):
    assert container.auth_service.resolve(999) is None


def test_register_rejects_name_longer_than_column(container, store):
    with pytest.raises(ValidationError) as exc:
        container.account_service.register(_form(name="N" * 101))

    assert "100" in exc.value.errors["name"]
    assert store.accounts == {}

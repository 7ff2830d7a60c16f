from __future__ import annotations

import pytest

from employee_management.access.decorators import SESSION_KEY
from employee_management.access.gate import Identity
from employee_management.core.enums import Role
from employee_management.main import create_app
from tests.fakes import InMemoryStore, build_container


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def container(store):
    return build_container(store)


@pytest.fixture
def admin_account(store):
    return store.add_admin(name="Admin", email="admin@x.com", password="admin12345")


@pytest.fixture
def admin(admin_account):
    return Identity(
        account_id=admin_account.account_id,
        name=admin_account.name,
        email=admin_account.email,
        role=Role.ADMIN,
    )


@pytest.fixture
def alice_profile(store):
    return store.add_employee(name="Alice", email="alice@x.com", password="password1", department="Sales")


@pytest.fixture
def alice(alice_profile):
    return Identity(
        account_id=alice_profile.account_id,
        name=alice_profile.name,
        email=alice_profile.email,
        role=Role.EMPLOYEE,
        employee_id=alice_profile.employee_id,
    )


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Put an account id into the session without going through the login form."""

    def _login(account_id: int):
        with client.session_transaction() as sess:
            sess[SESSION_KEY] = account_id
        return client

    return _login

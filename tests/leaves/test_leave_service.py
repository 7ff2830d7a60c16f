from __future__ import annotations

from datetime import date

import pytest

from employee_management.core.enums import LeaveStatus
from employee_management.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from employee_management.leaves.service import LeaveService, LeaveSubmission


def _submit(container, who, start="2025-04-01", end="2025-04-03", reason="Family trip"):
    return container.leave_service.submit(who, LeaveSubmission(start_date=start, end_date=end, reason=reason))


def test_new_request_is_pending(container, alice):
    leave_id = _submit(container, alice)

    leave = container.leave_service.get(leave_id)
    assert leave.status == LeaveStatus.PENDING
    assert leave.employee_id == alice.employee_id
    assert leave.days == 3


def test_end_before_start_is_rejected_and_nothing_stored(container, store, alice):
    with pytest.raises(ValidationError) as exc:
        _submit(container, alice, start="2025-05-10", end="2025-05-01")

    assert "end_date" in exc.value.errors
    assert store.leaves == {}


def test_single_day_leave_is_allowed(container, alice):
    leave_id = _submit(container, alice, start="2025-05-10", end="2025-05-10")

    assert container.leave_service.get(leave_id).days == 1


def test_missing_fields_reported_together(container, alice):
    with pytest.raises(ValidationError) as exc:
        _submit(container, alice, start="", end="not-a-date", reason="  ")

    assert set(exc.value.errors) == {"start_date", "end_date", "reason"}


def test_approved_request_is_visible_to_its_employee(container, admin, alice):
    leave_id = _submit(container, alice)

    assert container.leave_service.set_status(admin, leave_id, "approved") == LeaveStatus.APPROVED

    mine = container.leave_service.list_for_employee(alice.employee_id)
    assert [(r.leave_id, r.status) for r in mine] == [(leave_id, LeaveStatus.APPROVED)]


def test_status_can_move_between_any_values(container, admin, alice):
    leave_id = _submit(container, alice)

    for status in ("rejected", "approved", "pending"):
        container.leave_service.set_status(admin, leave_id, status)
        assert container.leave_service.get(leave_id).status == LeaveStatus(status)


def test_unknown_status_is_rejected(container, admin, alice):
    leave_id = _submit(container, alice)

    with pytest.raises(ValidationError) as exc:
        container.leave_service.set_status(admin, leave_id, "cancelled")

    assert "status" in exc.value.errors
    assert container.leave_service.get(leave_id).status == LeaveStatus.PENDING


def test_employee_cannot_review_leave(container, alice):
    leave_id = _submit(container, alice)

    with pytest.raises(AuthorizationError):
        container.leave_service.set_status(alice, leave_id, "approved")


def test_admin_cannot_submit_leave(container, admin):
    with pytest.raises(AuthorizationError):
        _submit(container, admin)


def test_status_change_on_missing_request_is_not_found(container, admin):
    with pytest.raises(NotFoundError):
        container.leave_service.set_status(admin, 404, "approved")


def test_delete_removes_request(container, admin, alice):
    leave_id = _submit(container, alice)

    container.leave_service.delete(admin, leave_id)

    with pytest.raises(NotFoundError):
        container.leave_service.get(leave_id)


def test_admin_list_includes_names_in_submission_order(container, store, admin, alice):
    bob_profile = store.add_employee(name="Bob", email="bob@x.com")
    bob = container.auth_service.resolve(bob_profile.account_id)
    first = _submit(container, alice)
    second = _submit(container, bob, reason="Doctor")

    rows = container.leave_service.list_all(admin)

    assert [(r.leave_id, r.employee_name) for r in rows] == [(first, "Alice"), (second, "Bob")]
    assert container.leave_service.list_for_employee(alice.employee_id)[0].leave_id == first


def test_count_by_status(container, admin, alice):
    a = _submit(container, alice)
    _submit(container, alice)
    container.leave_service.set_status(admin, a, "approved")

    counts = container.leave_service.count_by_status(employee_id=alice.employee_id)

    assert counts[LeaveStatus.APPROVED] == 1
    assert counts[LeaveStatus.PENDING] == 1
    assert counts[LeaveStatus.REJECTED] == 0


def test_to_ui_reports_dates_and_label(container, alice):
    leave_id = _submit(container, alice, start=date(2025, 6, 1), end=date(2025, 6, 2))

    ui = LeaveService.to_ui(container.leave_service.get(leave_id))

    assert (ui["start_date"], ui["end_date"], ui["days"]) == ("2025-06-01", "2025-06-02", 2)
    assert ui["status"] == "pending"

from __future__ import annotations

import logging

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..access.decorators import guard
from ..access.gate import Identity, Requirement
from ..common.datetime_utils import today_local
from ..core.enums import LeaveStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from .service import EmployeeUpdate, NewEmployee

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("name", "email", "phone", "department", "position")


def _profile_form() -> dict:
    return {f: request.form.get(f, "") for f in _PROFILE_FIELDS}


def register(app: Flask, container: Container) -> None:
    requires = guard(container)

    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @requires(Requirement.ADMIN)
    def admin_dashboard(identity: Identity):
        today = today_local()
        leave_counts = container.leave_service.count_by_status()
        return render_template(
            "admin/dashboard.html",
            identity=identity,
            employee_count=container.employee_service.count(),
            pending_leaves=leave_counts[LeaveStatus.PENDING],
            leave_counts={k.value: v for k, v in leave_counts.items()},
            attendance_today={k.value: v for k, v in container.attendance_service.summary_for_date(today).items()},
            today=today.strftime("%Y-%m-%d"),
            active_page="admin_dashboard",
        )

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @requires(Requirement.ADMIN)
    def admin_employees(identity: Identity):
        employees = container.employee_service.list_employees()
        return render_template(
            "admin/employees/index.html",
            identity=identity,
            employees=employees,
            active_page="admin_employees",
        )

    @app.route("/admin/employees/create", methods=["GET"], endpoint="create_employee")
    @requires(Requirement.ADMIN)
    def create_employee(identity: Identity):
        return render_template(
            "admin/employees/form.html",
            identity=identity,
            form={f: "" for f in _PROFILE_FIELDS},
            errors={},
            employee=None,
            active_page="admin_employees",
        )

    @app.route("/admin/employees", methods=["POST"], endpoint="store_employee")
    @requires(Requirement.ADMIN)
    def store_employee(identity: Identity):
        form = _profile_form()
        errors: dict[str, str] = {}
        try:
            container.employee_service.admin_create_employee(
                identity,
                NewEmployee(password=request.form.get("password", ""), **form),
            )
            flash(f"Employee {form['name'].strip()} created.", "success")
            return redirect(url_for("admin_employees"))
        except ValidationError as e:
            errors = e.errors
            flash("Please correct the highlighted fields.", "danger")
        except AuthorizationError as e:
            flash(str(e), "danger")
            return redirect(url_for("home"))
        except Exception:
            logger.exception("creating employee failed")
            flash("System error while creating the employee", "danger")

        return render_template(
            "admin/employees/form.html",
            identity=identity,
            form=form,
            errors=errors,
            employee=None,
            active_page="admin_employees",
        )

    @app.route("/admin/employees/<int:employee_id>/edit", methods=["GET", "POST"], endpoint="edit_employee")
    @requires(Requirement.ADMIN)
    def edit_employee(employee_id: int, identity: Identity):
        employee = container.employee_service.get_employee(employee_id)
        form = {f: getattr(employee, f) or "" for f in _PROFILE_FIELDS}
        errors: dict[str, str] = {}

        if request.method == "POST":
            form = _profile_form()
            try:
                container.employee_service.admin_update_employee(identity, employee_id, EmployeeUpdate(**form))
                flash("Employee updated.", "success")
                return redirect(url_for("admin_employees"))
            except ValidationError as e:
                errors = e.errors
                flash("Please correct the highlighted fields.", "danger")
            except NotFoundError:
                abort(404)
            except AuthorizationError as e:
                flash(str(e), "danger")
                return redirect(url_for("home"))
            except Exception:
                logger.exception("updating employee %s failed", employee_id)
                flash("System error while updating the employee", "danger")

        return render_template(
            "admin/employees/form.html",
            identity=identity,
            form=form,
            errors=errors,
            employee=employee,
            active_page="admin_employees",
        )

    @app.route("/admin/employees/<int:employee_id>/delete", methods=["POST"], endpoint="delete_employee")
    @requires(Requirement.ADMIN)
    def delete_employee(employee_id: int, identity: Identity):
        try:
            container.employee_service.admin_delete_employee(identity, employee_id)
            flash("Employee deleted.", "success")
        except NotFoundError:
            abort(404)
        except AuthorizationError as e:
            flash(str(e), "danger")
            return redirect(url_for("home"))
        except Exception:
            logger.exception("deleting employee %s failed", employee_id)
            flash("System error while deleting the employee", "danger")

        return redirect(url_for("admin_employees"))

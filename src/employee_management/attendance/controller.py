from __future__ import annotations

import logging

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..access.decorators import guard
from ..access.gate import Identity, Requirement
from ..common.datetime_utils import today_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from .service import AttendanceInput

logger = logging.getLogger(__name__)


def _attendance_form() -> dict:
    return {
        "employee_id": request.form.get("employee_id", ""),
        "work_date": request.form.get("work_date", ""),
        "status": request.form.get("status", ""),
    }


def register(app: Flask, container: Container) -> None:
    requires = guard(container)
    svc = container.attendance_service

    def _render_form(identity: Identity, form: dict, errors: dict, record=None):
        return render_template(
            "admin/attendances/form.html",
            identity=identity,
            form=form,
            errors=errors,
            record=record,
            employees=container.employee_service.list_employees(),
            statuses=[s.value for s in AttendanceStatus],
            active_page="admin_attendances",
        )

    @app.route("/admin/attendances", methods=["GET"], endpoint="admin_attendances")
    @requires(Requirement.ADMIN)
    def admin_attendances(identity: Identity):
        employee_id = request.args.get("employee_id", type=int)
        rows = [svc.to_ui(r) for r in svc.list_all(employee_id=employee_id)]
        return render_template(
            "admin/attendances/index.html",
            identity=identity,
            rows=rows,
            employees=container.employee_service.list_employees(),
            selected_employee_id=employee_id,
            active_page="admin_attendances",
        )

    @app.route("/admin/attendances/create", methods=["GET", "POST"], endpoint="create_attendance")
    @requires(Requirement.ADMIN)
    def create_attendance(identity: Identity):
        form = {
            "employee_id": request.args.get("employee_id", ""),
            "work_date": today_local().strftime("%Y-%m-%d"),
            "status": AttendanceStatus.PRESENT.value,
        }
        errors: dict[str, str] = {}

        if request.method == "POST":
            form = _attendance_form()
            try:
                svc.record(identity, AttendanceInput(**form))
                flash("Attendance recorded.", "success")
                return redirect(url_for("admin_attendances"))
            except ValidationError as e:
                errors = e.errors
                flash("Please correct the highlighted fields.", "danger")
            except AuthorizationError as e:
                flash(str(e), "danger")
                return redirect(url_for("home"))
            except Exception:
                logger.exception("recording attendance failed")
                flash("System error while recording attendance", "danger")

        return _render_form(identity, form, errors)

    @app.route("/admin/attendances/<int:attendance_id>/edit", methods=["GET", "POST"], endpoint="edit_attendance")
    @requires(Requirement.ADMIN)
    def edit_attendance(attendance_id: int, identity: Identity):
        record = svc.get(attendance_id)
        form = {
            "employee_id": str(record.employee_id),
            "work_date": record.work_date.strftime("%Y-%m-%d"),
            "status": record.status.value,
        }
        errors: dict[str, str] = {}

        if request.method == "POST":
            form = _attendance_form()
            try:
                svc.update(identity, attendance_id, AttendanceInput(**form))
                flash("Attendance updated.", "success")
                return redirect(url_for("admin_attendances"))
            except ValidationError as e:
                errors = e.errors
                flash("Please correct the highlighted fields.", "danger")
            except NotFoundError:
                abort(404)
            except AuthorizationError as e:
                flash(str(e), "danger")
                return redirect(url_for("home"))
            except Exception:
                logger.exception("updating attendance %s failed", attendance_id)
                flash("System error while updating attendance", "danger")

        return _render_form(identity, form, errors, record=record)

    @app.route("/admin/attendances/<int:attendance_id>/delete", methods=["POST"], endpoint="delete_attendance")
    @requires(Requirement.ADMIN)
    def delete_attendance(attendance_id: int, identity: Identity):
        try:
            svc.delete(identity, attendance_id)
            flash("Attendance record deleted.", "success")
        except NotFoundError:
            abort(404)
        except AuthorizationError as e:
            flash(str(e), "danger")
            return redirect(url_for("home"))
        except Exception:
            logger.exception("deleting attendance %s failed", attendance_id)
            flash("System error while deleting attendance", "danger")
        return redirect(url_for("admin_attendances"))

    @app.route("/employee/attendances", methods=["GET"], endpoint="my_attendances")
    @requires(Requirement.EMPLOYEE)
    def my_attendances(identity: Identity):
        rows = []
        if identity.employee_id is not None:
            rows = [svc.to_ui(r) for r in svc.list_for_employee(identity.employee_id)]
        return render_template(
            "employee/attendances.html",
            identity=identity,
            rows=rows,
            active_page="my_attendances",
        )

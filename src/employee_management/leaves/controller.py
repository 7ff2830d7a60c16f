from __future__ import annotations

import logging

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..access.decorators import guard
from ..access.gate import Identity, Requirement
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import LeaveStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from .service import LeaveSubmission

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    requires = guard(container)
    svc = container.leave_service

    @app.route("/employee/dashboard", endpoint="employee_dashboard")
    @requires(Requirement.EMPLOYEE)
    def employee_dashboard(identity: Identity):
        counts = {s.value: 0 for s in LeaveStatus}
        recent = []
        if identity.employee_id is not None:
            counts = {k.value: v for k, v in svc.count_by_status(employee_id=identity.employee_id).items()}
            records = container.attendance_service.list_for_employee(identity.employee_id)
            recent = [container.attendance_service.to_ui(r) for r in records[:DEFAULT_RECENT_LIMIT]]
        return render_template(
            "employee/dashboard.html",
            identity=identity,
            leave_counts=counts,
            recent_attendance=recent,
            active_page="employee_dashboard",
        )

    @app.route("/employee/leaves", methods=["GET"], endpoint="my_leaves")
    @requires(Requirement.EMPLOYEE)
    def my_leaves(identity: Identity):
        rows = []
        if identity.employee_id is not None:
            rows = [svc.to_ui(r) for r in svc.list_for_employee(identity.employee_id)]
        return render_template("employee/leaves/index.html", identity=identity, rows=rows, active_page="my_leaves")

    @app.route("/employee/leaves/create", methods=["GET", "POST"], endpoint="create_leave")
    @requires(Requirement.EMPLOYEE)
    def create_leave(identity: Identity):
        form = {"start_date": "", "end_date": "", "reason": ""}
        errors: dict[str, str] = {}

        if request.method == "POST":
            # Only these three fields are read; any submitted "status" is ignored.
            form = {k: request.form.get(k, "") for k in form}
            try:
                svc.submit(identity, LeaveSubmission(**form))
                flash("Leave request submitted.", "success")
                return redirect(url_for("my_leaves"))
            except ValidationError as e:
                errors = e.errors
                flash("Please correct the highlighted fields.", "danger")
            except AuthorizationError as e:
                flash(str(e), "danger")
                return redirect(url_for("home"))
            except Exception:
                logger.exception("submitting leave failed")
                flash("System error while submitting the request", "danger")

        return render_template(
            "employee/leaves/form.html",
            identity=identity,
            form=form,
            errors=errors,
            active_page="create_leave",
        )

    @app.route("/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @requires(Requirement.ADMIN)
    def admin_leaves(identity: Identity):
        rows = [svc.to_ui(r) for r in svc.list_all(identity)]
        return render_template(
            "admin/leaves/index.html",
            identity=identity,
            rows=rows,
            statuses=[s.value for s in LeaveStatus],
            active_page="admin_leaves",
        )

    @app.route("/admin/leaves/<int:leave_id>/status", methods=["POST"], endpoint="update_leave_status")
    @requires(Requirement.ADMIN)
    def update_leave_status(leave_id: int, identity: Identity):
        try:
            status = svc.set_status(identity, leave_id, request.form.get("status", ""))
            flash(f"Leave request marked {status.value}.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except NotFoundError:
            abort(404)
        except AuthorizationError as e:
            flash(str(e), "danger")
            return redirect(url_for("home"))
        except Exception:
            logger.exception("updating leave %s failed", leave_id)
            flash("System error while updating the request", "danger")
        return redirect(url_for("admin_leaves"))

    @app.route("/admin/leaves/<int:leave_id>/delete", methods=["POST"], endpoint="delete_leave")
    @requires(Requirement.ADMIN)
    def delete_leave(leave_id: int, identity: Identity):
        try:
            svc.delete(identity, leave_id)
            flash("Leave request deleted.", "success")
        except NotFoundError:
            abort(404)
        except AuthorizationError as e:
            flash(str(e), "danger")
            return redirect(url_for("home"))
        except Exception:
            logger.exception("deleting leave %s failed", leave_id)
            flash("System error while deleting the request", "danger")
        return redirect(url_for("admin_leaves"))

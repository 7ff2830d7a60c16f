from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..access.decorators import SESSION_KEY, current_identity, guard
from ..access.gate import Identity, Requirement
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from .service import RegistrationForm

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    requires = guard(container)

    @app.route("/", endpoint="home")
    @requires(Requirement.AUTHENTICATED)
    def home(identity: Identity):
        if identity.is_admin:
            return redirect(url_for("admin_dashboard"))
        return redirect(url_for("employee_dashboard"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_identity(container) is not None:
            return redirect(url_for("home"))

        email = ""
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember")

            try:
                identity = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = bool(remember)
                session[SESSION_KEY] = identity.account_id

                flash(f"Welcome back, {identity.name}!", "success")
                return redirect(url_for("home"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("login failed unexpectedly")
                flash("System error while logging in", "danger")

        return render_template("auth/login.html", email=email)

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if current_identity(container) is not None:
            return redirect(url_for("home"))

        form = {"name": "", "email": ""}
        errors: dict[str, str] = {}
        if request.method == "POST":
            form = {"name": request.form.get("name", ""), "email": request.form.get("email", "")}
            try:
                container.account_service.register(
                    RegistrationForm(
                        name=form["name"],
                        email=form["email"],
                        password=request.form.get("password", ""),
                        password_confirmation=request.form.get("password_confirmation", ""),
                    )
                )
                flash("Registration successful. Please log in.", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                errors = e.errors
                flash("Please correct the highlighted fields.", "danger")
            except Exception:
                logger.exception("registration failed unexpectedly")
                flash("System error while registering", "danger")

        return render_template("auth/register.html", form=form, errors=errors)

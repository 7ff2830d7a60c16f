from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, redirect, render_template, request, url_for
from flask_wtf.csrf import CSRFError, CSRFProtect

from config import get_settings_module

from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, MIN_PASSWORD_LENGTH
from .core.exceptions import NotFoundError
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, ensure_admin_account, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]

csrf = CSRFProtect()


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return render_template("errors/404.html", message=str(e)), 404

    @app.errorhandler(404)
    def handle_404(e):
        return render_template("errors/404.html", message="Page not found"), 404

    @app.errorhandler(CSRFError)
    def handle_csrf(e):
        logger.warning("CSRF check failed on %s: %s", request.path, e.description)
        flash("Your form expired. Please try again.", "warning")
        return redirect(url_for("home"))


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(
        __name__,
        template_folder=str(REPO_ROOT / "templates"),
        static_folder=str(REPO_ROOT / "static"),
    )

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["WTF_CSRF_ENABLED"] = bool(getattr(settings, "WTF_CSRF_ENABLED", True))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.permanent_session_lifetime = timedelta(days=app.config["SESSION_DAYS"])
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info(
        "starting with settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    min_password_length = int(getattr(settings, "MIN_PASSWORD_LENGTH", MIN_PASSWORD_LENGTH))
    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_admin_account(
                db_config,
                name=getattr(settings, "ADMIN_NAME", "Administrator"),
                email=getattr(settings, "ADMIN_EMAIL"),
                password=getattr(settings, "ADMIN_PASSWORD"),
                min_password_length=min_password_length,
            )
        container = build_container(
            db_config=db_config,
            min_password_length=min_password_length,
        )

    csrf.init_app(app)
    _register_error_handlers(app)

    register_accounts(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)

    return app

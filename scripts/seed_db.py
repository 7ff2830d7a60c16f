"""Create or refresh the admin account configured by ADMIN_NAME / ADMIN_EMAIL / ADMIN_PASSWORD."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for _p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))

from config import get_settings_module

from employee_management.core.constants import MIN_PASSWORD_LENGTH
from employee_management.core.exceptions import ValidationError
from employee_management.core.logging import configure_logging
from employee_management.database.bootstrap import ensure_admin_account


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    try:
        account_id = ensure_admin_account(
            db_config,
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password=getattr(settings, "ADMIN_PASSWORD", ""),
            min_password_length=int(getattr(settings, "MIN_PASSWORD_LENGTH", MIN_PASSWORD_LENGTH)),
        )
    except ValidationError as e:
        raise SystemExit(str(e))
    print(f"OK: Admin account {settings.ADMIN_EMAIL} ready (id={account_id})")


if __name__ == "__main__":
    main()

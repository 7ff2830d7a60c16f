from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False
    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]

    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = DBConfig.from_mapping(db_config)
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s@%s/%s", target.user, target.host, target.database)


def ensure_admin_account(
    db_config: dict,
    *,
    name: str,
    email: str,
    password: str,
    min_password_length: int = MIN_PASSWORD_LENGTH,
) -> int:
    """Create or refresh the configured admin account.

    This is the only path that produces an account with role=admin. A password
    shorter than ``min_password_length`` is refused before touching the database.
    """

    if len(password or "") < int(min_password_length):
        raise ValidationError(
            f"ADMIN_PASSWORD must be at least {min_password_length} characters", field="password"
        )

    target = DBConfig.from_mapping(db_config)
    email = email.strip().lower()
    password_hash = generate_password_hash(password)

    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT account_id, role FROM accounts WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing and existing["role"] != Role.ADMIN.value:
            raise RuntimeError(f"{email} already belongs to a non-admin account")
        if existing:
            cur.execute(
                "UPDATE accounts SET name=%s, password_hash=%s, role=%s WHERE account_id=%s",
                (name, password_hash, Role.ADMIN.value, existing["account_id"]),
            )
            account_id = int(existing["account_id"])
        else:
            cur.execute(
                "INSERT INTO accounts(name, email, password_hash, role) VALUES(%s,%s,%s,%s)",
                (name, email, password_hash, Role.ADMIN.value),
            )
            account_id = int(cur.lastrowid)
        conn.commit()
    finally:
        conn.close()

    logger.info("admin account ready: %s (id=%s)", email, account_id)
    return account_id


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

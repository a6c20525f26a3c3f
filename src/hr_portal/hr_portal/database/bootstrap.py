from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


@contextmanager
def _connection(target: DBConfig, *, with_database: bool = True) -> Iterator:
    params = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        params["database"] = target.database
    conn = mysql.connector.connect(**params)
    try:
        yield conn
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
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


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def _run_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    with _connection(DBConfig.from_dict(db_config)) as conn:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with _connection(target, with_database=False) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_file(db_config, schema_path)
    logger.info("applied %s", Path(schema_path).name)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_file(db_config, seed_path)
    logger.info("applied %s", Path(seed_path).name)


DEMO_USERS = (
    # full_name, email, password, role, department, position
    ("Admin Demo", "admin@example.com", "admin1234", "admin", "Human Resources", "HR Manager"),
    ("Jane Employee", "jane@example.com", "employee123", "user", "Engineering", "Developer"),
    ("Sam Designer", "sam@example.com", "employee123", "user", "Design", "Product Designer"),
)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo accounts; seed.sql provides their departments."""
    with _connection(DBConfig.from_dict(db_config)) as conn:
        cur = conn.cursor(dictionary=True)

        for full_name, email, password, role, dept, position in DEMO_USERS:
            cur.execute("SELECT dept_id FROM departments WHERE dept_name=%s", (dept,))
            row = cur.fetchone()
            if not row:
                raise RuntimeError(f"Missing departments row for dept_name={dept}")
            cur.execute(
                """
                INSERT INTO users (full_name, email, password_hash, role, dept_id, position)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    full_name=VALUES(full_name), password_hash=VALUES(password_hash), role=VALUES(role),
                    dept_id=VALUES(dept_id), position=VALUES(position), is_active=1
                """,
                (full_name, email, generate_password_hash(password), role, int(row["dept_id"]), position),
            )

        conn.commit()
    logger.info("demo users ready: %s", ", ".join(u[1] for u in DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    with _connection(DBConfig.from_dict(db_config)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_SELECT = """
    SELECT u.user_id, u.email, u.full_name, u.password_hash, u.role, u.dept_id,
           d.dept_name, u.position, u.join_date, u.is_active
    FROM users u
    LEFT JOIN departments d ON d.dept_id = u.dept_id
"""


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        dept_id=row.get("dept_id"),
        dept_name=row.get("dept_name"),
        position=row.get("position"),
        join_date=row.get("join_date"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        role: Role,
        dept_id: Optional[int] = None,
        position: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(email, full_name, password_hash, role, dept_id, position, join_date, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s,CURDATE(),1)
                    """,
                    (email, full_name, password_hash, role.value, dept_id, position),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError:
            raise ValidationError("Email is already registered")

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.is_active=1 ORDER BY u.full_name")
            return [_row_to_user(r) for r in fetchall(cur)]

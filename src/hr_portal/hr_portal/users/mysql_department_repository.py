from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .department_model import Department
from .department_repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name FROM departments ORDER BY dept_name")
            rows = fetchall(cur)
            return [Department(dept_id=int(r["dept_id"]), dept_name=r["dept_name"]) for r in rows]

    def get_by_name(self, dept_name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name FROM departments WHERE dept_name=%s", (dept_name,))
            r = fetchone(cur)
            return Department(dept_id=int(r["dept_id"]), dept_name=r["dept_name"]) if r else None

    def create(self, dept_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(dept_name) VALUES(%s)", (dept_name,))
            return int(cur.lastrowid)

    def delete(self, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET dept_id=NULL WHERE dept_id=%s", (int(dept_id),))
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (int(dept_id),))
            return cur.rowcount > 0

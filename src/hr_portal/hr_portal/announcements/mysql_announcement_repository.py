from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Priority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Announcement
from .repository import AnnouncementRepository

_SELECT = """
    SELECT announcement_id, title, subject, content, priority, author_id, author_name, created_at
    FROM announcements
"""


def _row_to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["announcement_id"]),
        title=r["title"],
        subject=r.get("subject"),
        content=r["content"],
        priority=Priority(r["priority"]),
        author_id=r.get("author_id"),
        author_name=r.get("author_name"),
        created_at=r["created_at"],
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent(self, *, limit: int = 50) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_at DESC, announcement_id DESC LIMIT %s", (int(limit),))
            return [_row_to_announcement(r) for r in fetchall(cur)]

    def get(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE announcement_id=%s", (int(announcement_id),))
            r = fetchone(cur)
            return _row_to_announcement(r) if r else None

    def create(
        self,
        *,
        title: str,
        subject: Optional[str],
        content: str,
        priority: Priority,
        author_id: Optional[int],
        author_name: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO announcements(title, subject, content, priority, author_id, author_name)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (title, subject, content, priority.value, author_id, author_name),
            )
            return int(cur.lastrowid)

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE announcement_id=%s", (int(announcement_id),))
            return cur.rowcount > 0

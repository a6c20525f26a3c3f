from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Message
from .repository import MessageRepository

_SELECT = """
    SELECT m.message_id, m.sender_id, s.full_name AS sender_name, m.receiver_id,
           r.full_name AS receiver_name, m.subject, m.body, m.sent_at, m.is_read
    FROM messages m
    JOIN users s ON s.user_id = m.sender_id
    JOIN users r ON r.user_id = m.receiver_id
"""


def _row_to_message(r: dict) -> Message:
    return Message(
        message_id=int(r["message_id"]),
        sender_id=int(r["sender_id"]),
        sender_name=r["sender_name"],
        receiver_id=int(r["receiver_id"]),
        receiver_name=r["receiver_name"],
        subject=r["subject"],
        body=r["body"],
        sent_at=r["sent_at"],
        read=bool(r["is_read"]),
    )


class MySQLMessageRepository(MessageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, sender_id: int, receiver_id: int, subject: str, body: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO messages(sender_id, receiver_id, subject, body)
                VALUES(%s,%s,%s,%s)
                """,
                (int(sender_id), int(receiver_id), subject, body),
            )
            return int(cur.lastrowid)

    def get(self, message_id: int) -> Optional[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.message_id=%s", (int(message_id),))
            r = fetchone(cur)
            return _row_to_message(r) if r else None

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE m.sender_id=%s OR m.receiver_id=%s ORDER BY m.sent_at DESC LIMIT %s",
                (int(user_id), int(user_id), int(limit)),
            )
            return [_row_to_message(r) for r in fetchall(cur)]

    def mark_read(self, message_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE messages SET is_read=1 WHERE message_id=%s", (int(message_id),))
            return cur.rowcount > 0

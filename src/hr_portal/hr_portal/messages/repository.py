from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Message


class MessageRepository(Protocol):
    def create(self, *, sender_id: int, receiver_id: int, subject: str, body: str) -> int:
        raise NotImplementedError

    def get(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[Message]:
        """Messages the user sent or received, newest first."""
        raise NotImplementedError

    def mark_read(self, message_id: int) -> bool:
        raise NotImplementedError

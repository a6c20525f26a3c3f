from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..security.context import SessionContext
from ..users.repository import UserRepository
from .model import Message
from .repository import MessageRepository

logger = logging.getLogger(__name__)


class MessageService:
    """Direct messages between employees."""

    def __init__(self, messages: MessageRepository, users: UserRepository):
        self._messages = messages
        self._users = users

    def send(self, ctx: SessionContext, *, receiver_id: int, subject: str, body: str) -> Message:
        sender_id = ctx.require_user_id()
        if int(receiver_id) == sender_id:
            raise ValidationError("You cannot message yourself")
        receiver = self._users.get_by_id(int(receiver_id))
        if receiver is None or not receiver.is_active:
            raise NotFoundError("Recipient not found")

        message_id = self._messages.create(
            sender_id=sender_id,
            receiver_id=receiver.user_id,
            subject=require_non_empty(subject, "Subject"),
            body=require_non_empty(body, "Message"),
        )
        logger.info("message %s sent from %s to %s", message_id, sender_id, receiver.user_id)
        return self._get(message_id)

    def list_for(self, ctx: SessionContext) -> Sequence[Message]:
        return self._messages.list_for_user(ctx.require_user_id())

    def mark_read(self, ctx: SessionContext, message_id: int) -> Message:
        message = self._get(message_id)
        if message.receiver_id != ctx.require_user_id():
            raise AuthorizationError("Only the recipient can mark a message as read")
        if not message.read:
            self._messages.mark_read(message.message_id)
        return self._get(message_id)

    def _get(self, message_id: int) -> Message:
        message = self._messages.get(int(message_id))
        if message is None:
            raise NotFoundError("Message not found")
        return message


def to_dict(m: Message) -> dict:
    return {
        "id": m.message_id,
        "sender_id": m.sender_id,
        "sender_name": m.sender_name,
        "receiver_id": m.receiver_id,
        "receiver_name": m.receiver_name,
        "subject": m.subject,
        "body": m.body,
        "sent_at": m.sent_at.isoformat() if m.sent_at else None,
        "read": m.read,
    }

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Priority
from ..core.exceptions import AuthorizationError, NotFoundError
from ..security.context import SessionContext
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def list(self, *, limit: int = 50) -> Sequence[Announcement]:
        return self._announcements.list_recent(limit=limit)

    def create(
        self,
        ctx: SessionContext,
        *,
        title: str,
        content: str,
        subject: Optional[str] = None,
        priority: Priority = Priority.MEDIUM,
        author_name: Optional[str] = None,
    ) -> Announcement:
        if not ctx.is_admin:
            raise AuthorizationError("Only admins can post announcements")

        announcement_id = self._announcements.create(
            title=require_non_empty(title, "Title"),
            subject=(subject or "").strip() or None,
            content=require_non_empty(content, "Content"),
            priority=priority,
            author_id=ctx.user_id,
            author_name=author_name or ctx.email,
        )
        logger.info("announcement %s posted by %s", announcement_id, ctx.email or ctx.user_id)
        created = self._announcements.get(announcement_id)
        if created is None:
            raise NotFoundError("Announcement was not saved")
        return created

    def delete(self, ctx: SessionContext, announcement_id: int) -> None:
        if not ctx.is_admin:
            raise AuthorizationError("Only admins can delete announcements")
        if not self._announcements.delete(int(announcement_id)):
            raise NotFoundError("Announcement not found")


def to_dict(a: Announcement) -> dict:
    return {
        "id": a.announcement_id,
        "title": a.title,
        "subject": a.subject,
        "content": a.content,
        "priority": a.priority.value,
        "author_id": a.author_id,
        "author_name": a.author_name,
        "created_at": a.created_at.isoformat() if a.created_at else None,
    }

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Priority
from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_recent(self, *, limit: int = 50) -> Sequence[Announcement]:
        raise NotImplementedError

    def get(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError

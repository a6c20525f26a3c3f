from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Priority


@dataclass(frozen=True)
class Announcement:
    announcement_id: int
    title: str
    content: str
    priority: Priority
    created_at: datetime
    subject: Optional[str] = None
    author_id: Optional[int] = None
    author_name: Optional[str] = None

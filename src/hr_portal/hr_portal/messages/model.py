from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Message:
    message_id: int
    sender_id: int
    sender_name: str
    receiver_id: int
    receiver_name: str
    subject: str
    body: str
    sent_at: datetime
    read: bool = False

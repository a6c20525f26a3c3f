from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import RequestStatus, RequestType


@dataclass(frozen=True)
class ApprovalRequest:
    request_id: int
    request_type: RequestType
    user_id: int
    user_name: str
    work_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    requested_clock_in: Optional[time] = None
    requested_clock_out: Optional[time] = None
    resolved_by: Optional[int] = None
    resolved_at: Optional[datetime] = None
    admin_note: Optional[str] = None

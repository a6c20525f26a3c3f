from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus, RequestType
from .model import ApprovalRequest


class RequestRepository(Protocol):
    def create(
        self,
        *,
        request_type: RequestType,
        user_id: int,
        work_date: date,
        reason: str,
        requested_clock_in: Optional[time] = None,
        requested_clock_out: Optional[time] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[ApprovalRequest]:
        raise NotImplementedError

    def list(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[ApprovalRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        resolved_by: Optional[int],
        resolved_at: datetime,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status``; False if it was not pending."""

        raise NotImplementedError

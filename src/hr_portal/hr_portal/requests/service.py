from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import AttendanceMode, RequestStatus, RequestType
from ..core.exceptions import AuthorizationError, NotFoundError, RecordConflictError, ValidationError
from ..security.context import SessionContext
from .model import ApprovalRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)


class RequestService:
    """Employee requests (attendance fix, WFH, sick leave) and their admin decisions."""

    def __init__(self, requests: RequestRepository, attendance: AttendanceService):
        self._requests = requests
        self._attendance = attendance

    def submit(
        self,
        ctx: SessionContext,
        *,
        request_type: RequestType,
        work_date: date,
        reason: str,
        requested_clock_in: Optional[time] = None,
        requested_clock_out: Optional[time] = None,
    ) -> ApprovalRequest:
        user_id = ctx.require_user_id()
        reason = require_non_empty(reason, "Reason")

        if request_type == RequestType.ATTENDANCE_FIX:
            if requested_clock_in is None and requested_clock_out is None:
                raise ValidationError("Provide at least one corrected time")
            if self._attendance.get_record(user_id, work_date) is None:
                raise ValidationError("No attendance record found for that date")
        else:
            requested_clock_in = requested_clock_out = None

        request_id = self._requests.create(
            request_type=request_type,
            user_id=user_id,
            work_date=work_date,
            reason=reason,
            requested_clock_in=requested_clock_in,
            requested_clock_out=requested_clock_out,
        )
        logger.info("user %s submitted %s request %s for %s", user_id, request_type.value, request_id, work_date)
        return self.get(request_id)

    def approve(self, ctx: SessionContext, request_id: int, admin_note: str = "") -> ApprovalRequest:
        req = self._pending_for_decision(ctx, request_id)

        correction = None
        if req.request_type == RequestType.ATTENDANCE_FIX:
            correction = self._attendance.prepare_correction(
                user_id=req.user_id,
                work_date=req.work_date,
                clock_in=_on(req.work_date, req.requested_clock_in),
                clock_out=_on(req.work_date, req.requested_clock_out),
            )

        # Attendance is written only after this decision wins.
        decided = self._decide(ctx, req, RequestStatus.APPROVED, admin_note)

        if correction is not None:
            self._attendance.save_correction(correction)
        elif req.request_type == RequestType.WFH:
            self._attendance.set_mode(req.user_id, req.work_date, AttendanceMode.REMOTE)

        return decided

    def reject(self, ctx: SessionContext, request_id: int, admin_note: str = "") -> ApprovalRequest:
        req = self._pending_for_decision(ctx, request_id)
        return self._decide(ctx, req, RequestStatus.REJECTED, admin_note)

    def get(self, request_id: int) -> ApprovalRequest:
        req = self._requests.get(int(request_id))
        if req is None:
            raise NotFoundError("Request not found")
        return req

    def list_mine(self, ctx: SessionContext) -> Sequence[ApprovalRequest]:
        return self._requests.list(user_id=ctx.require_user_id())

    def list_all(self, status: Optional[RequestStatus] = None) -> Sequence[ApprovalRequest]:
        return self._requests.list(status=status)

    def _pending_for_decision(self, ctx: SessionContext, request_id: int) -> ApprovalRequest:
        if not ctx.is_admin:
            raise AuthorizationError("Only admins can decide requests")
        req = self.get(request_id)
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been decided")
        return req

    def _decide(
        self, ctx: SessionContext, req: ApprovalRequest, status: RequestStatus, admin_note: str
    ) -> ApprovalRequest:
        ok = self._requests.decide(
            request_id=req.request_id,
            status=status,
            resolved_by=ctx.user_id,
            resolved_at=now_local(),
            admin_note=(admin_note or "").strip() or None,
        )
        if not ok:
            raise RecordConflictError("Request was decided concurrently")
        logger.info("request %s %s by %s", req.request_id, status.value.lower(), ctx.email or ctx.user_id)
        return self.get(req.request_id)


def _on(day: date, value: Optional[time]) -> Optional[datetime]:
    return datetime.combine(day, value) if value is not None else None


def to_dict(req: ApprovalRequest) -> dict:
    return {
        "id": req.request_id,
        "type": req.request_type.value,
        "user_id": req.user_id,
        "user_name": req.user_name,
        "date": req.work_date.isoformat(),
        "reason": req.reason,
        "requested_clock_in": req.requested_clock_in.strftime("%H:%M") if req.requested_clock_in else None,
        "requested_clock_out": req.requested_clock_out.strftime("%H:%M") if req.requested_clock_out else None,
        "status": req.status.value,
        "created_at": req.created_at.isoformat() if req.created_at else None,
        "resolved_at": req.resolved_at.isoformat() if req.resolved_at else None,
        "resolved_by": req.resolved_by,
        "admin_note": req.admin_note,
    }

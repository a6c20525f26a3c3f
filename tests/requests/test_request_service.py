from datetime import date, datetime, time

import pytest

from src.hr_portal.hr_portal.core.enums import AttendanceMode, AttendanceStatus, RequestStatus, RequestType, Role
from src.hr_portal.hr_portal.core.exceptions import AuthorizationError, RecordConflictError, ValidationError
from src.hr_portal.hr_portal.security.context import SessionContext

MONDAY = date(2025, 1, 6)


def _at(hh: int, mm: int = 0) -> datetime:
    return datetime.combine(MONDAY, time(hh, mm))


@pytest.fixture
def late_day(container, employee):
    container.attendance_service.clock_in(employee.user_id, now=_at(10, 40))
    container.attendance_service.clock_out(employee.user_id, now=_at(19, 0))


def test_fix_request_needs_a_record(container, employee_ctx):
    with pytest.raises(ValidationError, match="No attendance record"):
        container.request_service.submit(
            employee_ctx,
            request_type=RequestType.ATTENDANCE_FIX,
            work_date=MONDAY,
            reason="Badge reader was down",
            requested_clock_in=time(10, 0),
        )


def test_fix_request_needs_a_time(container, employee_ctx, late_day):
    with pytest.raises(ValidationError, match="corrected time"):
        container.request_service.submit(
            employee_ctx, request_type=RequestType.ATTENDANCE_FIX, work_date=MONDAY, reason="oops"
        )


def test_reason_is_required(container, employee_ctx):
    with pytest.raises(ValidationError):
        container.request_service.submit(employee_ctx, request_type=RequestType.WFH, work_date=MONDAY, reason="  ")


def test_approving_fix_corrects_attendance(container, employee, employee_ctx, admin_ctx, late_day):
    req = container.request_service.submit(
        employee_ctx,
        request_type=RequestType.ATTENDANCE_FIX,
        work_date=MONDAY,
        reason="Badge reader was down",
        requested_clock_in=time(10, 0),
    )
    assert req.status == RequestStatus.PENDING

    decided = container.request_service.approve(admin_ctx, req.request_id, "ok")
    record = container.attendance_service.get_record(employee.user_id, MONDAY)

    assert decided.status == RequestStatus.APPROVED
    assert decided.resolved_by == admin_ctx.user_id
    assert decided.admin_note == "ok"
    assert record.clock_in == _at(10, 0)
    assert record.status == AttendanceStatus.ON_TIME
    assert record.work_hours == 9.0
    assert record.is_corrected


def test_approving_wfh_marks_day_remote(container, employee, employee_ctx, admin_ctx, late_day):
    req = container.request_service.submit(
        employee_ctx, request_type=RequestType.WFH, work_date=MONDAY, reason="Plumber visit"
    )

    container.request_service.approve(admin_ctx, req.request_id)
    record = container.attendance_service.get_record(employee.user_id, MONDAY)

    assert record.mode == AttendanceMode.REMOTE
    assert record.status == AttendanceStatus.LATE
    assert record.clock_in == _at(10, 40)
    assert not record.is_corrected


def test_fix_is_not_applied_when_another_decision_wins(
    container, repos, employee, employee_ctx, admin_ctx, late_day, monkeypatch
):
    req = container.request_service.submit(
        employee_ctx,
        request_type=RequestType.ATTENDANCE_FIX,
        work_date=MONDAY,
        reason="Badge reader was down",
        requested_clock_in=time(10, 0),
    )
    before = container.attendance_service.get_record(employee.user_id, MONDAY)
    requests_repo = repos["requests_repo"]
    decide = requests_repo.decide

    def rejected_first(**kwargs):
        decide(**{**kwargs, "status": RequestStatus.REJECTED, "resolved_by": None})
        return decide(**kwargs)

    monkeypatch.setattr(requests_repo, "decide", rejected_first)

    with pytest.raises(RecordConflictError):
        container.request_service.approve(admin_ctx, req.request_id)

    assert container.attendance_service.get_record(employee.user_id, MONDAY) == before
    assert requests_repo.get(req.request_id).status == RequestStatus.REJECTED


def test_invalid_fix_keeps_request_pending(container, employee, employee_ctx, admin_ctx, late_day):
    req = container.request_service.submit(
        employee_ctx,
        request_type=RequestType.ATTENDANCE_FIX,
        work_date=MONDAY,
        reason="Left after the meeting",
        requested_clock_in=time(20, 0),
    )

    with pytest.raises(ValidationError, match="earlier than clock-in"):
        container.request_service.approve(admin_ctx, req.request_id)

    assert container.request_service.get(req.request_id).status == RequestStatus.PENDING
    assert container.attendance_service.get_record(employee.user_id, MONDAY).clock_in == _at(10, 40)


def test_sick_leave_only_records_decision(container, employee_ctx, admin_ctx):
    req = container.request_service.submit(
        employee_ctx, request_type=RequestType.SICK_LEAVE, work_date=MONDAY, reason="Flu"
    )

    decided = container.request_service.reject(admin_ctx, req.request_id, "Need a note")

    assert decided.status == RequestStatus.REJECTED
    assert container.attendance_service.get_record(employee_ctx.user_id, MONDAY) is None


def test_only_admins_decide(container, employee_ctx):
    req = container.request_service.submit(
        employee_ctx, request_type=RequestType.SICK_LEAVE, work_date=MONDAY, reason="Flu"
    )

    with pytest.raises(AuthorizationError):
        container.request_service.approve(employee_ctx, req.request_id)


def test_request_is_decided_once(container, employee_ctx, admin_ctx):
    req = container.request_service.submit(
        employee_ctx, request_type=RequestType.SICK_LEAVE, work_date=MONDAY, reason="Flu"
    )
    container.request_service.approve(admin_ctx, req.request_id)

    with pytest.raises(ValidationError, match="already been decided"):
        container.request_service.reject(admin_ctx, req.request_id)


def test_super_admin_can_decide_without_account(container, employee_ctx):
    req = container.request_service.submit(
        employee_ctx, request_type=RequestType.WFH, work_date=MONDAY, reason="Snow"
    )
    root = SessionContext(user_id=None, role=Role.ADMIN, email="root@example.com")

    decided = container.request_service.approve(root, req.request_id)

    assert decided.status == RequestStatus.APPROVED
    assert decided.resolved_by is None


def test_lists(container, employee_ctx, admin_ctx):
    svc = container.request_service
    first = svc.submit(employee_ctx, request_type=RequestType.WFH, work_date=MONDAY, reason="a")
    svc.submit(employee_ctx, request_type=RequestType.SICK_LEAVE, work_date=MONDAY, reason="b")
    svc.approve(admin_ctx, first.request_id)

    assert len(svc.list_mine(employee_ctx)) == 2
    assert svc.list_mine(admin_ctx) == []
    assert [r.request_type for r in svc.list_all(RequestStatus.PENDING)] == [RequestType.SICK_LEAVE]

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hr_portal.hr_portal.announcements.model import Announcement
from src.hr_portal.hr_portal.attendance.model import AttendanceRecord
from src.hr_portal.hr_portal.container import Container, assemble
from src.hr_portal.hr_portal.core.enums import (
    AttendanceMode,
    HolidayType,
    Priority,
    RequestStatus,
    Role,
)
from src.hr_portal.hr_portal.core.exceptions import RecordConflictError, ValidationError
from src.hr_portal.hr_portal.holidays.model import Holiday
from src.hr_portal.hr_portal.messages.model import Message
from src.hr_portal.hr_portal.requests.model import ApprovalRequest
from src.hr_portal.hr_portal.security.context import SessionContext
from src.hr_portal.hr_portal.security.tokens import TokenService
from src.hr_portal.hr_portal.settings.model import OrganizationSettings
from src.hr_portal.hr_portal.users.department_model import Department
from src.hr_portal.hr_portal.users.model import User

# 2025-01-06 is a Monday; 2025-01-11 a Saturday.
MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)


def at(day: date, hh: int, mm: int = 0) -> datetime:
    return datetime.combine(day, time(hh, mm))


class InMemoryAttendance:
    def __init__(self):
        self.by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self.by_user_date.get((user_id, work_date))

    def list_for_user(self, user_id: int, *, start: date, end: date):
        items = [r for r in self.by_user_date.values() if r.user_id == user_id and start <= r.work_date <= end]
        return sorted(items, key=lambda r: r.work_date, reverse=True)

    def list_for_date(self, work_date: date):
        return sorted((r for r in self.by_user_date.values() if r.work_date == work_date), key=lambda r: r.user_id)

    def create_checkin(self, *, user_id, work_date, clock_in, mode, status) -> int:
        if (user_id, work_date) in self.by_user_date:
            raise RecordConflictError("duplicate")
        self._id += 1
        self.by_user_date[(user_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            mode=mode,
            status=status,
        )
        return self._id

    def _find(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self.by_user_date.values() if r.attendance_id == attendance_id), None)

    def _put(self, record: AttendanceRecord) -> None:
        self.by_user_date[(record.user_id, record.work_date)] = record

    def overwrite_checkin(self, *, attendance_id, clock_in, mode, status) -> None:
        rec = self._find(attendance_id)
        if rec is None or rec.is_open:
            raise RecordConflictError("changed")
        self._put(
            replace(rec, clock_in=clock_in, clock_out=None, mode=mode, status=status, work_hours=0.0, is_corrected=False)
        )

    def update_checkout(self, *, attendance_id, clock_out, status, work_hours) -> None:
        rec = self._find(attendance_id)
        if rec is None or not rec.is_open:
            raise RecordConflictError("closed")
        self._put(replace(rec, clock_out=clock_out, status=status, work_hours=work_hours))

    def admin_update_record(self, *, attendance_id, clock_in, clock_out, mode, status, work_hours, is_corrected) -> bool:
        rec = self._find(attendance_id)
        if rec is None:
            return False
        self._put(
            replace(
                rec,
                clock_in=clock_in,
                clock_out=clock_out,
                mode=mode,
                status=status,
                work_hours=work_hours,
                is_corrected=is_corrected,
            )
        )
        return True

    def update_mode(self, *, attendance_id, mode) -> bool:
        rec = self._find(attendance_id)
        if rec is None:
            return False
        self._put(replace(rec, mode=mode))
        return True

    def add(self, **fields) -> AttendanceRecord:
        """Test helper: store a record directly."""
        self._id += 1
        fields.setdefault("mode", AttendanceMode.OFFICE)
        rec = AttendanceRecord(attendance_id=self._id, **fields)
        self._put(rec)
        return rec


class InMemorySettings:
    def __init__(self):
        self.saved: Optional[OrganizationSettings] = None

    def load(self):
        return self.saved

    def save(self, settings: OrganizationSettings) -> None:
        self.saved = settings


class InMemoryHolidays:
    def __init__(self):
        self.items: dict[int, Holiday] = {}
        self._id = 0

    def get_for_date(self, holiday_date: date):
        return next((h for h in self.items.values() if h.holiday_date == holiday_date), None)

    def list_range(self, *, start=None, end=None):
        return sorted(
            (
                h
                for h in self.items.values()
                if (start is None or h.holiday_date >= start) and (end is None or h.holiday_date <= end)
            ),
            key=lambda h: h.holiday_date,
        )

    def create(self, *, holiday_date, name, holiday_type=HolidayType.PUBLIC, description=None) -> int:
        self._id += 1
        self.items[self._id] = Holiday(self._id, holiday_date, name, holiday_type, description)
        return self._id

    def delete(self, holiday_id: int) -> bool:
        return self.items.pop(holiday_id, None) is not None


class InMemoryDepartments:
    def __init__(self, names=("Engineering", "Design")):
        self.items: dict[int, Department] = {}
        for name in names:
            self.create(name)

    def list_all(self):
        return sorted(self.items.values(), key=lambda d: d.dept_name)

    def get_by_name(self, dept_name: str):
        return next((d for d in self.items.values() if d.dept_name == dept_name), None)

    def create(self, dept_name: str) -> int:
        dept_id = len(self.items) + 1
        while dept_id in self.items:
            dept_id += 1
        self.items[dept_id] = Department(dept_id, dept_name)
        return dept_id

    def delete(self, dept_id: int) -> bool:
        return self.items.pop(dept_id, None) is not None


class InMemoryUsers:
    def __init__(self, departments: InMemoryDepartments):
        self.departments = departments
        self.items: dict[int, User] = {}

    def get_by_id(self, user_id: int):
        return self.items.get(user_id)

    def get_by_email(self, email: str):
        return next((u for u in self.items.values() if u.email == email), None)

    def create_user(self, *, email, full_name, password_hash, role, dept_id=None, position=None) -> int:
        if self.get_by_email(email):
            raise ValidationError("Email is already registered")
        user_id = len(self.items) + 1
        dept = self.departments.items.get(dept_id) if dept_id else None
        self.items[user_id] = User(
            user_id=user_id,
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            dept_id=dept_id,
            dept_name=dept.dept_name if dept else None,
            position=position,
        )
        return user_id

    def list_active(self):
        return [u for u in self.items.values() if u.is_active]


class InMemoryRequests:
    def __init__(self, users: InMemoryUsers):
        self.users = users
        self.items: dict[int, ApprovalRequest] = {}

    def create(self, *, request_type, user_id, work_date, reason, requested_clock_in=None, requested_clock_out=None):
        request_id = len(self.items) + 1
        self.items[request_id] = ApprovalRequest(
            request_id=request_id,
            request_type=request_type,
            user_id=user_id,
            user_name=self.users.get_by_id(user_id).full_name,
            work_date=work_date,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2025, 1, 6, 12, 0),
            requested_clock_in=requested_clock_in,
            requested_clock_out=requested_clock_out,
        )
        return request_id

    def get(self, request_id: int):
        return self.items.get(request_id)

    def list(self, *, status=None, user_id=None, limit=200):
        return [
            r
            for r in sorted(self.items.values(), key=lambda r: r.request_id, reverse=True)
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ][:limit]

    def decide(self, *, request_id, status, resolved_by, resolved_at, admin_note=None) -> bool:
        req = self.items.get(request_id)
        if req is None or req.status != RequestStatus.PENDING:
            return False
        self.items[request_id] = replace(
            req, status=status, resolved_by=resolved_by, resolved_at=resolved_at, admin_note=admin_note
        )
        return True


class InMemoryAnnouncements:
    def __init__(self):
        self.items: dict[int, Announcement] = {}

    def list_recent(self, *, limit: int = 50):
        return sorted(self.items.values(), key=lambda a: a.announcement_id, reverse=True)[:limit]

    def get(self, announcement_id: int):
        return self.items.get(announcement_id)

    def create(self, *, title, subject, content, priority: Priority, author_id, author_name) -> int:
        announcement_id = len(self.items) + 1
        self.items[announcement_id] = Announcement(
            announcement_id=announcement_id,
            title=title,
            subject=subject,
            content=content,
            priority=priority,
            created_at=datetime(2025, 1, 6, 9, 0),
            author_id=author_id,
            author_name=author_name,
        )
        return announcement_id

    def delete(self, announcement_id: int) -> bool:
        return self.items.pop(announcement_id, None) is not None


class InMemoryMessages:
    def __init__(self, users: InMemoryUsers):
        self.users = users
        self.items: dict[int, Message] = {}

    def create(self, *, sender_id, receiver_id, subject, body) -> int:
        message_id = len(self.items) + 1
        self.items[message_id] = Message(
            message_id=message_id,
            sender_id=sender_id,
            sender_name=self.users.get_by_id(sender_id).full_name,
            receiver_id=receiver_id,
            receiver_name=self.users.get_by_id(receiver_id).full_name,
            subject=subject,
            body=body,
            sent_at=datetime(2025, 1, 6, 9, message_id % 60),
        )
        return message_id

    def get(self, message_id: int):
        return self.items.get(message_id)

    def list_for_user(self, user_id: int, *, limit: int = 100):
        mine = [m for m in self.items.values() if user_id in (m.sender_id, m.receiver_id)]
        return sorted(mine, key=lambda m: m.message_id, reverse=True)[:limit]

    def mark_read(self, message_id: int) -> bool:
        msg = self.items.get(message_id)
        if msg is None:
            return False
        self.items[message_id] = replace(msg, read=True)
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return at(MONDAY, 9, 55)


@pytest.fixture
def org_settings() -> OrganizationSettings:
    return OrganizationSettings(
        work_day_start=time(10, 0),
        work_day_end=time(19, 0),
        grace_minutes_in=10,
        grace_minutes_out=10,
        daily_target_hours=9.0,
        weekend_days=frozenset({5, 6}),
        week_start_day=6,
        allow_remote_clock_in=True,
        auto_clock_out=False,
    )


@pytest.fixture
def repos():
    departments = InMemoryDepartments()
    users = InMemoryUsers(departments)
    return {
        "users_repo": users,
        "departments_repo": departments,
        "settings_repo": InMemorySettings(),
        "holidays_repo": InMemoryHolidays(),
        "attendance_repo": InMemoryAttendance(),
        "requests_repo": InMemoryRequests(users),
        "announcements_repo": InMemoryAnnouncements(),
        "messages_repo": InMemoryMessages(users),
    }


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret="test-secret", expires_in="1h")


@pytest.fixture
def container(repos, tokens, org_settings) -> Container:
    return assemble(
        **repos,
        tokens=tokens,
        defaults=org_settings,
        super_admin_email="root@example.com",
        super_admin_password="root-password",
    )


@pytest.fixture
def attendance_repo(repos) -> InMemoryAttendance:
    return repos["attendance_repo"]


@pytest.fixture
def employee(repos) -> User:
    users = repos["users_repo"]
    user_id = users.create_user(
        email="jane@example.com",
        full_name="Jane Employee",
        password_hash=generate_password_hash("employee123"),
        role=Role.USER,
        dept_id=1,
        position="Developer",
    )
    return users.get_by_id(user_id)


@pytest.fixture
def admin(repos) -> User:
    users = repos["users_repo"]
    user_id = users.create_user(
        email="boss@example.com",
        full_name="Alex Admin",
        password_hash=generate_password_hash("admin1234"),
        role=Role.ADMIN,
        dept_id=2,
        position="HR Manager",
    )
    return users.get_by_id(user_id)


@pytest.fixture
def employee_ctx(employee) -> SessionContext:
    return SessionContext(user_id=employee.user_id, role=Role.USER, email=employee.email)


@pytest.fixture
def admin_ctx(admin) -> SessionContext:
    return SessionContext(user_id=admin.user_id, role=Role.ADMIN, email=admin.email)



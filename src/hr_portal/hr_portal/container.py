from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_hhmm
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .messages.mysql_message_repository import MySQLMessageRepository
from .messages.repository import MessageRepository
from .messages.service import MessageService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import RequestService
from .security.tokens import TokenService
from .settings.model import OrganizationSettings
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .users.department_repository import DepartmentRepository
from .users.mysql_department_repository import MySQLDepartmentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, DirectoryService, UserService
from .worktime.service import WorkHoursService


@dataclass(frozen=True)
class Container:
    tokens: TokenService

    auth_service: AuthService
    user_service: UserService
    directory_service: DirectoryService
    settings_service: SettingsService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    work_hours_service: WorkHoursService
    request_service: RequestService
    announcement_service: AnnouncementService
    message_service: MessageService

    conn: Optional[DatabaseConnection] = None


def default_settings(settings: ModuleType) -> OrganizationSettings:
    """Organization rules from the config module, used until an admin saves them."""
    return OrganizationSettings(
        work_day_start=parse_hhmm(getattr(settings, "WORK_DAY_START", "10:00")),
        work_day_end=parse_hhmm(getattr(settings, "WORK_DAY_END", "19:00")),
        grace_minutes_in=int(getattr(settings, "GRACE_MINUTES_IN", 10)),
        grace_minutes_out=int(getattr(settings, "GRACE_MINUTES_OUT", 10)),
        daily_target_hours=float(getattr(settings, "DAILY_TARGET_HOURS", 9)),
        weekend_days=frozenset(
            int(d) for d in str(getattr(settings, "WEEKEND_DAYS", "5,6")).split(",") if d.strip()
        ),
        week_start_day=int(getattr(settings, "WEEK_START_DAY", 6)),
        allow_remote_clock_in=bool(getattr(settings, "ALLOW_REMOTE_CLOCK_IN", True)),
        auto_clock_out=bool(getattr(settings, "AUTO_CLOCK_OUT", False)),
    )


def assemble(
    *,
    users_repo: UserRepository,
    departments_repo: DepartmentRepository,
    settings_repo: SettingsRepository,
    holidays_repo: HolidayRepository,
    attendance_repo: AttendanceRepository,
    requests_repo: RequestRepository,
    announcements_repo: AnnouncementRepository,
    messages_repo: MessageRepository,
    tokens: TokenService,
    defaults: OrganizationSettings,
    super_admin_email: Optional[str] = None,
    super_admin_password: Optional[str] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, fakes in tests)."""
    settings_service = SettingsService(settings_repo, defaults)
    holiday_service = HolidayService(holidays_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        settings_service,
        holiday_service,
        strategy_factory=AttendanceStrategyFactory(),
    )

    return Container(
        tokens=tokens,
        auth_service=AuthService(
            users_repo,
            tokens,
            super_admin_email=super_admin_email,
            super_admin_password=super_admin_password,
        ),
        user_service=UserService(users_repo, departments_repo),
        directory_service=DirectoryService(users_repo),
        settings_service=settings_service,
        holiday_service=holiday_service,
        attendance_service=attendance_service,
        work_hours_service=WorkHoursService(attendance_repo, settings_service),
        request_service=RequestService(requests_repo, attendance_service),
        announcement_service=AnnouncementService(announcements_repo),
        message_service=MessageService(messages_repo, users_repo),
        conn=conn,
    )


def build_container(*, settings: ModuleType) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
    tokens = TokenService(
        secret=getattr(settings, "JWT_SECRET", None) or getattr(settings, "SECRET_KEY"),
        algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
        expires_in=getattr(settings, "JWT_EXPIRES_IN", "12h"),
    )

    return assemble(
        users_repo=MySQLUserRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        messages_repo=MySQLMessageRepository(conn),
        tokens=tokens,
        defaults=default_settings(settings),
        super_admin_email=getattr(settings, "SADMIN_EMAIL", None),
        super_admin_password=getattr(settings, "SADMIN_PASSWORD", None),
        conn=conn,
    )

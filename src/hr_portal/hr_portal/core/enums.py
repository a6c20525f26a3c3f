from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class AttendanceMode(str, Enum):
    OFFICE = "OFFICE"
    REMOTE = "REMOTE"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored with each daily record."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY = "EARLY"
    ABSENT = "ABSENT"
    HOLIDAY = "HOLIDAY"
    WEEKEND = "WEEKEND"

    @property
    def is_non_work_day(self) -> bool:
        return self in (AttendanceStatus.WEEKEND, AttendanceStatus.HOLIDAY)


class RequestType(str, Enum):
    ATTENDANCE_FIX = "ATTENDANCE_FIX"
    WFH = "WFH"
    SICK_LEAVE = "SICK_LEAVE"


class RequestStatus(str, Enum):
    """Approval workflow state."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class HolidayType(str, Enum):
    PUBLIC = "public"
    OPTIONAL = "optional"
    RESTRICTED = "restricted"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..security.tokens import TokenService
from .department_model import Department
from .department_repository import DepartmentRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Verified identity. ``subject_id`` is None for the configured super-admin."""

    subject_id: Optional[int]
    role: Role
    email: str


class AuthService:
    """Use case: verify credentials and issue access tokens."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        *,
        super_admin_email: Optional[str] = None,
        super_admin_password: Optional[str] = None,
    ):
        self._users = users
        self._tokens = tokens
        self._sadmin_email = (super_admin_email or "").strip().lower() or None
        self._sadmin_password = super_admin_password or None

    def verify(self, email: str, password: str) -> Principal:
        email = (email or "").strip().lower()
        password = password or ""

        if (
            self._sadmin_email
            and self._sadmin_password
            and email == self._sadmin_email
            and hmac.compare_digest(password.encode(), self._sadmin_password.encode())
        ):
            return Principal(subject_id=None, role=Role.ADMIN, email=email)

        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return Principal(subject_id=user.user_id, role=user.role, email=user.email)

    def login(self, email: str, password: str) -> dict:
        principal = self.verify(email, password)
        claims = {"role": principal.role.value, "email": principal.email}
        if principal.subject_id is not None:
            claims["sub"] = principal.subject_id
        logger.info("login ok for %s (%s)", principal.email, principal.role.value)
        return {
            "access_token": self._tokens.issue(claims),
            "token_type": "bearer",
            "role": principal.role.value,
            "user_id": principal.subject_id,
        }


class UserService:
    """Use case: manage accounts and departments (admin)."""

    def __init__(self, users: UserRepository, departments: DepartmentRepository):
        self._users = users
        self._departments = departments

    def create_account(
        self,
        *,
        email: str,
        password: str,
        role: Role,
        full_name: str = "",
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> User:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        full_name = (full_name or "").strip() or email.split("@")[0]

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        dept_id = None
        if department and department.strip():
            dept = self._departments.get_by_name(department.strip())
            if not dept:
                raise ValidationError(f"Unknown department: {department}")
            dept_id = dept.dept_id

        user_id = self._users.create_user(
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            role=role,
            dept_id=dept_id,
            position=(position or "").strip() or None,
        )
        logger.info("created %s account %s (id=%s)", role.value, email, user_id)
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User was not saved")
        return user

    def create_user(self, **fields) -> User:
        return self.create_account(role=Role.USER, **fields)

    def create_admin(self, **fields) -> User:
        return self.create_account(role=Role.ADMIN, **fields)

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def add_department(self, *, current_role: Role, name: str) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        name = require_non_empty(name, "Department name")
        if self._departments.get_by_name(name):
            raise ValidationError("Department already exists")
        return self._departments.create(name)

    def remove_department(self, *, current_role: Role, dept_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        if not self._departments.delete(int(dept_id)):
            raise NotFoundError("Department not found")


_SORT_KEYS = {
    "name": lambda u: (u.full_name or "").lower(),
    "department": lambda u: ((u.dept_name or "").lower(), (u.full_name or "").lower()),
}


class DirectoryService:
    """Employee directory: search, filter by department, sort."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list(
        self,
        *,
        search: str = "",
        department: str = "",
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> list[User]:
        if sort_by not in _SORT_KEYS:
            raise ValidationError(f"sort_by must be one of: {', '.join(_SORT_KEYS)}")
        if sort_order not in ("asc", "desc"):
            raise ValidationError("sort_order must be asc or desc")

        needle = (search or "").strip().lower()
        dept = (department or "").strip().lower()

        out = []
        for u in self._users.list_active():
            if dept and dept != "all" and (u.dept_name or "").lower() != dept:
                continue
            if needle and not any(needle in (v or "").lower() for v in (u.full_name, u.email, u.position)):
                continue
            out.append(u)

        out.sort(key=_SORT_KEYS[sort_by], reverse=sort_order == "desc")
        return out


def user_to_dict(user: User) -> dict:
    return {
        "id": user.user_id,
        "email": user.email,
        "name": user.full_name,
        "role": user.role.value,
        "department": user.dept_name,
        "position": user.position,
        "join_date": user.join_date.isoformat() if user.join_date else None,
        "is_active": user.is_active,
    }

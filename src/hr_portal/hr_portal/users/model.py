from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code).
    """

    user_id: int
    email: str
    full_name: str
    password_hash: str
    role: Role
    dept_id: Optional[int] = None
    dept_name: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[date] = None
    is_active: bool = True

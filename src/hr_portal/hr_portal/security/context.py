from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class SessionContext:
    """Who is calling, built per request from the bearer token.

    Handlers receive it as an argument; nothing about the caller is kept in
    module or application globals.
    """

    user_id: Optional[int]
    role: Role
    email: Optional[str] = None
    token: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: Dict[str, Any], *, token: Optional[str] = None) -> "SessionContext":
        try:
            role = Role(claims["role"])
        except (KeyError, ValueError):
            raise AuthenticationError("Invalid token: unknown role")
        sub = claims.get("sub")
        try:
            user_id = int(sub) if sub is not None else None
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid token: bad subject")
        return cls(
            user_id=user_id,
            role=role,
            email=claims.get("email"),
            token=token,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_user_id(self) -> int:
        """Account-backed callers only; the configured super-admin has no user row."""
        if self.user_id is None:
            raise AuthorizationError("This action needs a user account")
        return self.user_id

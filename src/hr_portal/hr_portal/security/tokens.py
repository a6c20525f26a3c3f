"""
Signed access tokens (JWT) for the JSON API.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from ..core.exceptions import AuthenticationError

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expires_in(value: Any) -> timedelta:
    """Parse ``"30m"``, ``"12h"``, ``"7d"`` or a number of seconds."""
    if isinstance(value, (int, float)):
        return timedelta(seconds=int(value))
    match = _DURATION_RE.match(str(value or ""))
    if not match:
        raise ValueError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


class TokenService:
    ISSUER = "hr-portal"

    def __init__(self, *, secret: str, algorithm: str = "HS256", expires_in: Any = "12h") -> None:
        if not secret:
            raise ValueError("JWT secret is missing")
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = parse_expires_in(expires_in)

    def issue(self, claims: Dict[str, Any], *, now: Optional[datetime] = None) -> str:
        """
        Sign ``claims`` into an access token.

        Args:
            claims: must carry ``role``; ``sub`` is the user id when there is one

        Returns:
            str: encoded JWT
        """
        now = now or datetime.now(timezone.utc)
        payload = dict(claims)
        if payload.get("sub") is not None:
            payload["sub"] = str(payload["sub"])
        payload.update(
            {
                "iss": self.ISSUER,
                "iat": int(now.timestamp()),
                "exp": int((now + self.lifetime).timestamp()),
            }
        )
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify signature, expiry and issuer.

        Raises:
            AuthenticationError: if token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.ISSUER,
                options={"require": ["exp", "iat", "iss"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid token: {e}")

        if "role" not in payload:
            raise AuthenticationError("Invalid token: missing role")
        return payload

from __future__ import annotations

from functools import wraps
from typing import Callable, Tuple

from flask import request

from ..core.exceptions import AuthenticationError, AuthorizationError
from .context import SessionContext
from .tokens import TokenService


def context_from_request(tokens: TokenService) -> SessionContext:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing bearer token")
    token = token.strip()
    return SessionContext.from_claims(tokens.decode(token), token=token)


def build_guards(tokens: TokenService) -> Tuple[Callable, Callable]:
    """Return ``(login_required, admin_required)`` view decorators.

    Both pass the caller's ``SessionContext`` to the view as ``ctx``.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = context_from_request(tokens)
            return view(*args, ctx=ctx, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = context_from_request(tokens)
            if not ctx.is_admin:
                raise AuthorizationError("Admin access required")
            return view(*args, ctx=ctx, **kwargs)

        return wrapper

    return login_required, admin_required

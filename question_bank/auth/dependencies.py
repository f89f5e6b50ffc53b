"""
FastAPI dependencies for authentication and role checks.

Handlers that need the caller take an ``Identity`` parameter through one of
these dependencies, so they never run without a verified identity.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from question_bank.auth.jwt_handler import Identity, verify_token
from question_bank.errors import AuthError, ForbiddenError
from question_bank.models.user import UserRole

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

# HTTP Bearer token scheme; the session cookie is the fallback
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise AuthError("Not authorized to access this route")

    identity = verify_token(token)
    if identity is None:
        raise AuthError("Not authorized to access this route")

    return identity


def require_role(*allowed_roles: UserRole):
    """
    Dependency factory for role-based authorization.

    Usage:
        @router.post("/")
        async def create(user: Identity = Depends(require_role(UserRole.ADMIN))):
            ...
    """
    async def role_checker(current_user: Identity = Depends(get_current_user)) -> Identity:
        if current_user.role not in allowed_roles:
            logger.warning(
                f"Access denied for user {current_user.email} with role {current_user.role}. "
                f"Required roles: {[r.value for r in allowed_roles]}"
            )
            raise ForbiddenError(f"User role {current_user.role.value} is not authorized to access this route")
        return current_user

    return role_checker


require_admin = require_role(UserRole.ADMIN)

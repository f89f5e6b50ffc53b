"""
JWT token handling: issuing session tokens and verifying them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from question_bank.models.user import UserRole
from question_bank.settings import settings

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """The authenticated caller, decoded from a verified token."""
    user_id: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def create_access_token(
    user_id: str,
    email: str,
    role: str,
) -> str:
    """
    Create a signed session token.

    Args:
        user_id: User's identifier
        email: User's email
        role: User's role (admin, student)

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(days=settings.jwt_expire_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "role": role,
        "exp": expire,
        "iat": now
    }

    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    logger.info(f"Created access token for user: {email}")
    return token


def verify_token(token: str) -> Optional[Identity]:
    """Decode a token; None when the signature, expiry or payload is bad."""
    try:
        # jose checks "exp" during decode
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        return None

    try:
        return Identity(
            user_id=payload.get("user_id"),
            email=payload.get("email"),
            role=payload.get("role"),
        )
    except ValueError as e:
        logger.warning(f"Token payload rejected: {str(e)}")
        return None

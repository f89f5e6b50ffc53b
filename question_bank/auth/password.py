"""
Password hashing with bcrypt.
"""

import logging
import secrets
import string

import bcrypt

from question_bank.settings import settings

logger = logging.getLogger(__name__)

TEMP_PASSWORD_ALPHABET = string.ascii_lowercase + string.digits
TEMP_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain text password against a stored bcrypt hash.

    Returns False (never raises) for a malformed hash.
    """
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError as e:
        logger.error(f"Password verification error: {str(e)}")
        return False


def generate_temporary_password() -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(TEMP_PASSWORD_LENGTH))

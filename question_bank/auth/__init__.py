# Auth module: bcrypt password hashing, JWT session tokens, role checks

from question_bank.auth.dependencies import get_current_user, require_admin, require_role
from question_bank.auth.jwt_handler import Identity, create_access_token, verify_token
from question_bank.auth.password import generate_temporary_password, hash_password, verify_password

__all__ = [
    "get_current_user",
    "require_admin",
    "require_role",
    "Identity",
    "create_access_token",
    "verify_token",
    "generate_temporary_password",
    "hash_password",
    "verify_password",
]

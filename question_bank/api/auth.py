"""
Authentication routes: registration, login, password reset.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Response

from question_bank.auth.dependencies import TOKEN_COOKIE, get_current_user
from question_bank.auth.jwt_handler import Identity, create_access_token
from question_bank.auth.password import generate_temporary_password, hash_password, verify_password
from question_bank.errors import AuthError, InvalidInputError, NotFoundError
from question_bank.mailer import Mailer
from question_bank.models import (
    AuthResponse, ForgotPasswordRequest, LoginRequest, RegisterRequest, User, UserRole, normalize_email
)
from question_bank.settings import settings
from question_bank.storage.repo import QuestionBankRepository
from question_bank.wiring import get_mailer, get_repo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def send_token_response(user: User, response: Response) -> AuthResponse:
    """Issue a session token, set it as a cookie and build the JSON body."""
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)

    expires = datetime.now(timezone.utc) + timedelta(days=settings.jwt_cookie_expire_days)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        expires=expires,
        httponly=True,
        secure=settings.is_production,
    )
    return AuthResponse(token=token, userId=user.id, role=user.role)


@router.post("/register", response_model=AuthResponse)
async def register(
    req: RegisterRequest,
    response: Response,
    repo: QuestionBankRepository = Depends(get_repo),
) -> AuthResponse:
    user = User(email=req.email, password=hash_password(req.password), role=UserRole.STUDENT)
    # DuplicateError from the store becomes the 400 "Email already exists"
    await repo.create_user(user)

    logger.info(f"New user registered: {user.email}")
    return send_token_response(user, response)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    response: Response,
    repo: QuestionBankRepository = Depends(get_repo),
) -> AuthResponse:
    if not req.email or not req.password:
        raise InvalidInputError("Please provide an email and password")

    # Stored emails went through EmailStr at registration
    user = await repo.get_user_by_email(normalize_email(req.email))
    if user is None or not verify_password(req.password, user.password):
        logger.warning(f"Failed login for {req.email}")
        raise AuthError("Invalid credentials")

    logger.info(f"User logged in: {user.email}")
    return send_token_response(user, response)


@router.post("/forgotpassword")
async def forgot_password(
    req: ForgotPasswordRequest,
    repo: QuestionBankRepository = Depends(get_repo),
    mailer: Mailer = Depends(get_mailer),
) -> dict:
    user = await repo.get_user_by_email(req.email)
    if user is None:
        raise NotFoundError("No user with that email")

    temp_password = generate_temporary_password()
    await repo.set_user_password(user.id, hash_password(temp_password))

    await mailer.send(
        to=user.email,
        subject="Your Temporary Password",
        message=f"Your new password is: {temp_password}\n\nHope to see you.",
    )

    logger.info(f"Temporary password issued for {user.email}")
    return {"success": True, "message": "Temporary password sent to your email"}


@router.get("/me")
async def me(
    current_user: Identity = Depends(get_current_user),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    user = await repo.get_user(current_user.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return {"success": True, "data": user.public()}

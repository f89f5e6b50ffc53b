# Pydantic models for stored documents and request/response bodies

from question_bank.models.answer import AnswerSubmit, StudentAnswer
from question_bank.models.common import is_valid_object_id, new_object_id
from question_bank.models.question import (
    QUESTION_FIELD_TYPES, REDACTED_FIELDS, Question, QuestionCreate,
    QuestionLevel, QuestionType, redact
)
from question_bank.models.subject import Subject, SubjectCreate
from question_bank.models.user import (
    AuthResponse, ForgotPasswordRequest, LoginRequest, RegisterRequest,
    User, UserRole, normalize_email
)

__all__ = [
    "AnswerSubmit", "StudentAnswer",
    "is_valid_object_id", "new_object_id",
    "QUESTION_FIELD_TYPES", "REDACTED_FIELDS", "Question", "QuestionCreate",
    "QuestionLevel", "QuestionType", "redact",
    "Subject", "SubjectCreate",
    "AuthResponse", "ForgotPasswordRequest", "LoginRequest", "RegisterRequest",
    "User", "UserRole", "normalize_email",
]
